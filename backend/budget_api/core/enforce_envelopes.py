"""Envelope Rule Enforcement — validates every input and state condition before a mutation.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Return the normalized value on success, raise a BudgetError subclass on violation
    - Nothing here mutates an Envelope; the ledger applies results afterwards

Design Decisions:
    - Pure functions over ledger methods: testable without building a ledger
    - Raise typed errors (not error dicts): the ledger is called from HTTP routes,
      and the global handler maps BudgetError to a response in one place
"""

import math
from collections.abc import Iterable

from budget_api.core.domain_types import Amount, Envelope, EnvelopeId
from budget_api.core.errors import (
    BudgetExceededError,
    DuplicateCategoryError,
    InsufficientBalanceError,
    ValidationError,
)

CEILING_REL_TOL = 1e-12


def is_number(value: object) -> bool:
    """True for finite int/float values. bool is rejected even though it subclasses int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def require_positive_amount(value: object, field: str) -> Amount:
    """Rule: budgets, totals and transfer amounts must be positive numbers."""
    if not is_number(value) or value <= 0:
        raise ValidationError(f'"{field}" must be a positive number', field)
    return Amount(value)


def normalize_category(value: object) -> str:
    """Rule: category is a non-empty string once surrounding whitespace is trimmed."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('"category" must be a non-empty string', "category")
    return value.strip()


def category_key(category: str) -> str:
    """Comparison key for case-insensitive category uniqueness."""
    return category.strip().casefold()


def check_category_unique(
    category: str,
    envelopes: Iterable[Envelope],
    exclude_id: EnvelopeId | None = None,
) -> None:
    """Rule 3: no two envelopes share a category. exclude_id skips the envelope being updated."""
    key = category_key(category)
    for envelope in envelopes:
        if envelope.id != exclude_id and category_key(envelope.category) == key:
            raise DuplicateCategoryError(category)


def check_budget_ceiling(
    requested: Amount, allocated_elsewhere: Amount, total_budget: Amount,
) -> None:
    """Rule 1: sum of all envelope budgets never exceeds the total budget.

    Float sums depend on addition order, so a projected total within rounding
    distance of the ceiling counts as exactly at it.
    """
    projected = allocated_elsewhere + requested
    if projected > total_budget and not math.isclose(
        projected, total_budget, rel_tol=CEILING_REL_TOL,
    ):
        raise BudgetExceededError(
            requested, Amount(total_budget - allocated_elsewhere),
        )


def rebalance_for_budget(envelope: Envelope, new_budget: Amount) -> Amount:
    """Balance after moving the envelope's budget to new_budget.

    Increases pass straight through to the balance. Decreases come out of the
    balance and are refused when the balance is already zero or too small.
    """
    diff = new_budget - envelope.budget
    if diff >= 0:
        return Amount(envelope.balance + diff)
    decrease = -diff
    if envelope.balance == 0 or envelope.balance < decrease:
        raise InsufficientBalanceError(envelope.id, envelope.balance, decrease)
    return Amount(envelope.balance - decrease)


def require_balance_in_range(value: object, budget: Amount) -> Amount:
    """Rule 2: an explicitly set balance lies within 0..budget."""
    if not is_number(value) or value < 0:
        raise ValidationError('"balance" must be zero or a positive number', "balance")
    if value > budget:
        raise ValidationError(
            f'"balance" ({value}) cannot exceed the envelope budget ({budget})',
            "balance",
        )
    return Amount(value)


def check_distinct_envelopes(from_id: EnvelopeId, to_id: EnvelopeId) -> None:
    """Rule: a transfer needs two different envelopes."""
    if from_id == to_id:
        raise ValidationError(
            '"fromEnvelopeId" and "toEnvelopeId" cannot be the same',
            "toEnvelopeId",
        )


def check_sufficient_balance(envelope: Envelope, amount: Amount) -> None:
    """Rule: a transfer never drives the source balance below zero."""
    if envelope.balance < amount:
        raise InsufficientBalanceError(envelope.id, envelope.balance, amount)
