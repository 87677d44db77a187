"""Envelope Routes — CRUD and transfer endpoints over the envelope ledger.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Every ledger rule lives in EnvelopeLedger; routes only translate
    - Ledger errors propagate to the global BudgetError handler (no local try/except)
    - Path ids are positive integers; unknown ids answer 404 before the body is checked

Design Decisions:
    - POST /transfer declared before /{envelope_id} routes: literal path wins
    - Envelope resolved by get_existing_envelope (dependency), matching the
      id-then-body check order of the public API
    - delete returning False mapped to 404 (envelope was already gone)
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from budget_api.api.dependencies import get_existing_envelope, get_ledger
from budget_api.core.domain_types import Envelope
from budget_api.core.errors import NotFoundError
from budget_api.core.ledger import EnvelopeLedger
from budget_api.schemas.envelope import (
    EnvelopeCreate,
    EnvelopeResponse,
    EnvelopeUpdate,
    TransferRequest,
    TransferResponse,
    to_envelope_response,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/envelopes", tags=["envelopes"])


@router.post(
    "", response_model=EnvelopeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_envelope(
    body: EnvelopeCreate, ledger: EnvelopeLedger = Depends(get_ledger),
):
    """Create a new envelope funded with its full budget."""
    envelope = ledger.create(body.category, body.budget)
    logger.info(
        f"Envelope created: {envelope.category}",
        extra={"envelope_id": envelope.id, "amount": envelope.budget},
    )
    return to_envelope_response(envelope)


@router.get("", response_model=list[EnvelopeResponse])
async def list_envelopes(ledger: EnvelopeLedger = Depends(get_ledger)):
    """List all envelopes in creation order."""
    return [to_envelope_response(e) for e in ledger.list_envelopes()]


@router.post(
    "/transfer", response_model=TransferResponse,
    status_code=status.HTTP_201_CREATED,
)
async def transfer_balance(
    body: TransferRequest, ledger: EnvelopeLedger = Depends(get_ledger),
):
    """Move balance from one envelope to another."""
    result = ledger.transfer(
        body.from_envelope_id, body.to_envelope_id, body.amount,
    )
    logger.info(
        "Balance transferred",
        extra={
            "from_envelope_id": body.from_envelope_id,
            "to_envelope_id": body.to_envelope_id,
            "amount": body.amount,
        },
    )
    return TransferResponse.from_result(result)


@router.get("/{envelope_id}", response_model=EnvelopeResponse)
async def get_envelope(envelope: Envelope = Depends(get_existing_envelope)):
    """Get one envelope."""
    return to_envelope_response(envelope)


@router.put("/{envelope_id}", response_model=EnvelopeResponse)
async def update_envelope(
    body: EnvelopeUpdate,
    envelope: Envelope = Depends(get_existing_envelope),
    ledger: EnvelopeLedger = Depends(get_ledger),
):
    """Update category, budget and/or balance. Budget is applied before balance."""
    updated = ledger.update(
        envelope.id,
        category=body.category,
        budget=body.budget,
        balance=body.balance,
    )
    logger.info(
        "Envelope updated",
        extra={"envelope_id": updated.id, "category": updated.category},
    )
    return to_envelope_response(updated)


@router.delete(
    "/{envelope_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_envelope(
    envelope: Envelope = Depends(get_existing_envelope),
    ledger: EnvelopeLedger = Depends(get_ledger),
):
    """Delete an envelope. Its budget returns to the unallocated total."""
    if not ledger.delete(envelope.id):
        raise NotFoundError(envelope.id)
    logger.info("Envelope deleted", extra={"envelope_id": envelope.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
