"""Personal Budget API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BudgetError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One EnvelopeLedger created on startup, total budget fixed from settings

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Ledger on app.state (not a module global): injected into routes via get_ledger
    - No persistence: the ledger lives for the process and is lost on restart
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from budget_api.api.error_handlers import register_error_handlers
from budget_api.api.routes import budget, envelopes, health
from budget_api.config import get_settings
from budget_api.core.ledger import EnvelopeLedger
from budget_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.ledger = EnvelopeLedger(settings.total_budget)
    logger.info(
        f"Personal Budget API started (total budget {settings.total_budget})",
    )
    yield
    logger.info("Personal Budget API shutting down")


app = FastAPI(
    title="Personal Budget API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(envelopes.router)
app.include_router(budget.router)

register_error_handlers(app)

# Static files — serves the prebuilt UI when present
# ADR: mounted AFTER API routes so /api/v1/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
