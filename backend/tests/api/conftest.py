"""API test fixtures — FastAPI test client with a fresh ledger per test.

Invariants:
    - Every test gets its own EnvelopeLedger (total budget 2000)
    - get_ledger dependency overridden; lifespan does not run under ASGITransport
"""

import pytest
from httpx import ASGITransport, AsyncClient

from budget_api.api.dependencies import get_ledger
from budget_api.core.ledger import EnvelopeLedger
from budget_api.main import app


@pytest.fixture
def ledger() -> EnvelopeLedger:
    return EnvelopeLedger(total_budget=2000)


@pytest.fixture
async def client(ledger):
    """FastAPI test client with the ledger dependency overridden."""
    app.dependency_overrides[get_ledger] = lambda: ledger

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
