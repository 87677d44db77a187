"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EnvelopeId wraps a positive int — never reused once assigned
    - Amount wraps a finite real number (int or float, never bool)
    - Envelope is frozen: reads hand out snapshots, only the ledger replaces them

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - Frozen dataclasses over dicts: callers cannot mutate ledger state through a
      returned reference; dataclasses.replace() builds the next version
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EnvelopeId = NewType("EnvelopeId", int)


# ─── Value Types ─────────────────────────────────────────────────

Amount = NewType("Amount", float)


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Envelope:
    """A named sub-allocation of the total budget."""
    id: EnvelopeId
    category: str
    budget: Amount
    balance: Amount


@dataclass(frozen=True)
class TransferResult:
    """Both sides of a completed transfer, after the move."""
    from_envelope: Envelope
    to_envelope: Envelope


@dataclass(frozen=True)
class LedgerSummary:
    """Aggregate view of the ledger at one point in time."""
    total_budget: Amount
    used_budget: Amount
    remaining_budget: Amount
    total_available_balance: Amount
    envelope_count: int
