"""Envelope Rule Enforcement — tests for the pure check functions.

Tests cover:
    - is_number accepts finite int/float, rejects bool, NaN, inf, strings
    - require_positive_amount / normalize_category / require_balance_in_range
    - check_category_unique is case-insensitive and honours exclude_id
    - check_budget_ceiling allows exactly-at-ceiling, rejects above
    - rebalance_for_budget: pass-through increase, guarded decrease, zero-balance lock
    - check_distinct_envelopes / check_sufficient_balance
"""

import pytest

from budget_api.core.domain_types import Amount, Envelope, EnvelopeId
from budget_api.core.enforce_envelopes import (
    category_key,
    check_budget_ceiling,
    check_category_unique,
    check_distinct_envelopes,
    check_sufficient_balance,
    is_number,
    normalize_category,
    rebalance_for_budget,
    require_balance_in_range,
    require_positive_amount,
)
from budget_api.core.errors import (
    BudgetExceededError,
    DuplicateCategoryError,
    InsufficientBalanceError,
    ValidationError,
)


def _envelope(id=1, category="Groceries", budget=500, balance=500) -> Envelope:
    return Envelope(EnvelopeId(id), category, Amount(budget), Amount(balance))


# ─── is_number ───────────────────────────────────────────────────

def test_is_number_accepts_ints_and_floats():
    assert is_number(1)
    assert is_number(0)
    assert is_number(12.75)


def test_is_number_rejects_non_numbers():
    assert not is_number(True)
    assert not is_number("100")
    assert not is_number(None)
    assert not is_number(float("nan"))
    assert not is_number(float("inf"))


# ─── require_positive_amount ─────────────────────────────────────

def test_positive_amount_returned_unchanged():
    assert require_positive_amount(250, "budget") == 250


@pytest.mark.parametrize("value", [0, -1, -0.01, "50", None, False])
def test_non_positive_amount_raises_validation_error(value):
    with pytest.raises(ValidationError) as exc_info:
        require_positive_amount(value, "budget")
    assert exc_info.value.field == "budget"


# ─── normalize_category ──────────────────────────────────────────

def test_normalize_category_trims_whitespace():
    assert normalize_category("  Rent  ") == "Rent"


@pytest.mark.parametrize("value", ["", "   ", "\t\n", None, 12])
def test_normalize_category_rejects_empty_or_non_string(value):
    with pytest.raises(ValidationError):
        normalize_category(value)


def test_category_key_is_case_insensitive():
    assert category_key(" GROCERIES ") == category_key("groceries")


# ─── check_category_unique ───────────────────────────────────────

def test_unique_category_passes():
    check_category_unique("Rent", [_envelope()])


def test_duplicate_category_is_case_insensitive():
    with pytest.raises(DuplicateCategoryError):
        check_category_unique("gRoCeRiEs", [_envelope()])


def test_duplicate_check_skips_excluded_envelope():
    check_category_unique("GROCERIES", [_envelope(id=1)], exclude_id=EnvelopeId(1))


def test_duplicate_check_still_sees_other_envelopes_when_excluding():
    envelopes = [_envelope(id=1), _envelope(id=2, category="Rent")]
    with pytest.raises(DuplicateCategoryError):
        check_category_unique("rent", envelopes, exclude_id=EnvelopeId(1))


# ─── check_budget_ceiling ────────────────────────────────────────

def test_budget_exactly_at_ceiling_is_allowed():
    check_budget_ceiling(Amount(500), Amount(1500), Amount(2000))


def test_budget_within_rounding_of_ceiling_is_allowed():
    total = Amount(251.26 + 909.84 + 982.8)
    check_budget_ceiling(Amount(251.26), Amount(909.84 + 982.8), total)


def test_budget_one_cent_over_ceiling_raises():
    with pytest.raises(BudgetExceededError):
        check_budget_ceiling(Amount(500.01), Amount(1500), Amount(2000))


def test_budget_above_ceiling_raises():
    with pytest.raises(BudgetExceededError) as exc_info:
        check_budget_ceiling(Amount(600), Amount(1500), Amount(2000))
    assert exc_info.value.available == 500
    assert exc_info.value.requested == 600


# ─── rebalance_for_budget ────────────────────────────────────────

def test_budget_increase_passes_through_to_balance():
    assert rebalance_for_budget(_envelope(budget=500, balance=300), Amount(800)) == 600


def test_unchanged_budget_keeps_balance():
    assert rebalance_for_budget(_envelope(budget=500, balance=0), Amount(500)) == 0


def test_budget_decrease_comes_out_of_balance():
    assert rebalance_for_budget(_envelope(budget=500, balance=300), Amount(400)) == 200


def test_budget_decrease_equal_to_balance_empties_it():
    assert rebalance_for_budget(_envelope(budget=500, balance=100), Amount(400)) == 0


def test_budget_decrease_larger_than_balance_raises():
    with pytest.raises(InsufficientBalanceError):
        rebalance_for_budget(_envelope(budget=500, balance=50), Amount(400))


def test_zero_balance_blocks_any_budget_decrease():
    with pytest.raises(InsufficientBalanceError):
        rebalance_for_budget(_envelope(budget=500, balance=0), Amount(499.99))


# ─── require_balance_in_range ────────────────────────────────────

def test_balance_within_budget_accepted():
    assert require_balance_in_range(0, Amount(500)) == 0
    assert require_balance_in_range(500, Amount(500)) == 500


def test_negative_balance_rejected():
    with pytest.raises(ValidationError):
        require_balance_in_range(-1, Amount(500))


def test_balance_above_budget_rejected():
    with pytest.raises(ValidationError) as exc_info:
        require_balance_in_range(501, Amount(500))
    assert exc_info.value.field == "balance"


# ─── transfer checks ─────────────────────────────────────────────

def test_same_envelope_transfer_rejected():
    with pytest.raises(ValidationError):
        check_distinct_envelopes(EnvelopeId(1), EnvelopeId(1))


def test_distinct_envelopes_pass():
    check_distinct_envelopes(EnvelopeId(1), EnvelopeId(2))


def test_sufficient_balance_passes_at_exact_amount():
    check_sufficient_balance(_envelope(balance=200), Amount(200))


def test_insufficient_balance_raises():
    with pytest.raises(InsufficientBalanceError) as exc_info:
        check_sufficient_balance(_envelope(balance=200), Amount(200.01))
    assert exc_info.value.envelope_id == 1
