"""Route Dependencies — resolve the process-wide ledger for request handlers.

Invariants:
    - Exactly one EnvelopeLedger per app, created in lifespan, stored on app.state
    - Routes receive the ledger via Depends(get_ledger), never via import
    - Id routes resolve their envelope via get_existing_envelope (404 before body checks)

Design Decisions:
    - app.state over a module-level global: tests override get_ledger with a
      fresh ledger per test (app.dependency_overrides)
"""

from fastapi import Depends, Path, Request

from budget_api.core.domain_types import Envelope
from budget_api.core.ledger import EnvelopeLedger


def get_ledger(request: Request) -> EnvelopeLedger:
    """Return the ledger built at startup."""
    ledger = getattr(request.app.state, "ledger", None)
    if ledger is None:
        raise RuntimeError("Envelope ledger not initialized (lifespan did not run)")
    return ledger


def get_existing_envelope(
    envelope_id: int = Path(gt=0),
    ledger: EnvelopeLedger = Depends(get_ledger),
) -> Envelope:
    """Resolve the path envelope before the request body is validated.

    FastAPI runs sub-dependencies before body validation, so an unknown id
    answers 404 even when the body is also malformed.
    """
    return ledger.get_by_id(envelope_id)
