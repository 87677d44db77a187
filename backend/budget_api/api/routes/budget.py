"""Budget Summary Route — read-only aggregate view of the ledger."""

from fastapi import APIRouter, Depends

from budget_api.api.dependencies import get_ledger
from budget_api.core.ledger import EnvelopeLedger
from budget_api.schemas.envelope import LedgerSummaryResponse, to_summary_response

router = APIRouter(prefix="/api/v1/budget", tags=["budget"])


@router.get("", response_model=LedgerSummaryResponse)
async def get_budget_summary(ledger: EnvelopeLedger = Depends(get_ledger)):
    """Total, allocated and unallocated budget plus total spendable balance."""
    return to_summary_response(ledger.summary())
