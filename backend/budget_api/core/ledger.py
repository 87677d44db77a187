"""Envelope Ledger — in-memory envelope collection under a fixed total budget.

Invariants:
    - Sum of envelope budgets <= total_budget after every operation
    - create/update keep 0 <= balance <= budget; transfer keeps the sender >= 0
    - Categories unique case-insensitively (after trimming)
    - Ids strictly increasing, never reused after deletion
    - Every operation is all-or-nothing: checks run before any state changes

Design Decisions:
    - One RLock per ledger: all operations serialize, so aggregate reads
      (sum of budgets) cannot interleave with a write from another thread
    - Stored envelopes are frozen snapshots; mutation swaps in a new version,
      so a failed check never leaves a half-updated envelope behind
    - _last_id high-water mark instead of max(existing): deleting the newest
      envelope must not free its id
    - Instance state, not module globals: the app builds one in lifespan and
      tests build their own
"""

import math
import threading
from dataclasses import replace

from budget_api.core.domain_types import (
    Amount, Envelope, EnvelopeId, LedgerSummary, TransferResult,
)
from budget_api.core.enforce_envelopes import (
    check_budget_ceiling,
    check_category_unique,
    check_distinct_envelopes,
    check_sufficient_balance,
    normalize_category,
    rebalance_for_budget,
    require_balance_in_range,
    require_positive_amount,
)
from budget_api.core.errors import NotFoundError


class EnvelopeLedger:
    """Owns every envelope and every rule that moves money between them."""

    def __init__(self, total_budget: float):
        self.total_budget = require_positive_amount(total_budget, "total_budget")
        self._envelopes: dict[EnvelopeId, Envelope] = {}
        self._last_id = 0
        self._lock = threading.RLock()

    # --- Reads ---------------------------------------------------------------

    def list_envelopes(self) -> list[Envelope]:
        """All envelopes in creation order."""
        with self._lock:
            return list(self._envelopes.values())

    def get_by_id(self, envelope_id: int) -> Envelope:
        with self._lock:
            return self._require(envelope_id)

    def used_budget(self) -> Amount:
        with self._lock:
            return Amount(math.fsum(e.budget for e in self._envelopes.values()))

    def total_available_balance(self) -> Amount:
        with self._lock:
            return Amount(math.fsum(e.balance for e in self._envelopes.values()))

    def remaining_budget(self) -> Amount:
        """Part of the total budget not yet allocated to any envelope."""
        with self._lock:
            return Amount(self.total_budget - self.used_budget())

    def summary(self) -> LedgerSummary:
        with self._lock:
            used = self.used_budget()
            return LedgerSummary(
                total_budget=self.total_budget,
                used_budget=used,
                remaining_budget=Amount(self.total_budget - used),
                total_available_balance=self.total_available_balance(),
                envelope_count=len(self._envelopes),
            )

    # --- Mutations -----------------------------------------------------------

    def create(self, category: str, budget: float) -> Envelope:
        """Add an envelope whose balance starts at its full budget."""
        with self._lock:
            amount = require_positive_amount(budget, "budget")
            name = normalize_category(category)
            check_category_unique(name, self._envelopes.values())
            check_budget_ceiling(amount, self.used_budget(), self.total_budget)

            envelope = Envelope(
                id=EnvelopeId(self._last_id + 1),
                category=name,
                budget=amount,
                balance=amount,
            )
            self._envelopes[envelope.id] = envelope
            self._last_id = envelope.id
            return envelope

    def update(
        self,
        envelope_id: int,
        *,
        category: str | None = None,
        budget: float | None = None,
        balance: float | None = None,
    ) -> Envelope:
        """Apply category, then budget, then balance. An explicit balance wins
        over the balance shift caused by a budget change in the same call."""
        with self._lock:
            current = self._require(envelope_id)
            updated = current

            if category is not None:
                name = normalize_category(category)
                check_category_unique(
                    name, self._envelopes.values(), exclude_id=current.id,
                )
                updated = replace(updated, category=name)

            if budget is not None:
                new_budget = require_positive_amount(budget, "budget")
                check_budget_ceiling(
                    new_budget,
                    self._allocated_to_others(current.id),
                    self.total_budget,
                )
                updated = replace(
                    updated,
                    budget=new_budget,
                    balance=rebalance_for_budget(updated, new_budget),
                )

            if balance is not None:
                updated = replace(
                    updated,
                    balance=require_balance_in_range(balance, updated.budget),
                )

            self._envelopes[current.id] = updated
            return updated

    def delete(self, envelope_id: int) -> bool:
        """Remove an envelope. False when it does not exist."""
        with self._lock:
            return self._envelopes.pop(envelope_id, None) is not None

    def transfer(self, from_id: int, to_id: int, amount: float) -> TransferResult:
        """Move balance (not budget) between two envelopes."""
        with self._lock:
            source = self._require(from_id)
            target = self._require(to_id)
            value = require_positive_amount(amount, "amount")
            check_distinct_envelopes(source.id, target.id)
            check_sufficient_balance(source, value)

            source = replace(source, balance=Amount(source.balance - value))
            target = replace(target, balance=Amount(target.balance + value))
            self._envelopes[source.id] = source
            self._envelopes[target.id] = target
            return TransferResult(from_envelope=source, to_envelope=target)

    # --- Helpers -------------------------------------------------------------

    def _allocated_to_others(self, envelope_id: EnvelopeId) -> Amount:
        return Amount(math.fsum(
            e.budget for e in self._envelopes.values() if e.id != envelope_id
        ))

    def _require(self, envelope_id: int) -> Envelope:
        envelope = self._envelopes.get(envelope_id)
        if envelope is None:
            raise NotFoundError(envelope_id)
        return envelope
