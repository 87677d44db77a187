"""Envelope Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Numbers are strict: JSON strings like "100" are rejected, not coerced
    - EnvelopeUpdate carries at least one field
    - TransferRequest accepts fromEnvelopeId/toEnvelopeId (the public field names)

Design Decisions:
    - Shape checks only: uniqueness, ceilings and balances are the ledger's job,
      so the rules live in one place
    - from_attributes on responses: built straight from frozen core dataclasses
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from budget_api.core.domain_types import Envelope, LedgerSummary, TransferResult


class EnvelopeCreate(BaseModel):
    """Envelope creation — non-empty category, positive budget."""
    category: str = Field(min_length=1, max_length=200)
    budget: float = Field(gt=0, strict=True)

    @field_validator("category")
    @classmethod
    def strip_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("category cannot be empty or whitespace")
        return v


class EnvelopeUpdate(BaseModel):
    """Partial envelope update — any subset of category, budget, balance."""
    category: str | None = Field(None, max_length=200)
    budget: float | None = Field(None, gt=0, strict=True)
    balance: float | None = Field(None, ge=0, strict=True)

    @field_validator("category")
    @classmethod
    def strip_category(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("category cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def require_one_field(self):
        if self.category is None and self.budget is None and self.balance is None:
            raise ValueError("provide at least one of category, budget, balance")
        return self


class TransferRequest(BaseModel):
    """Balance transfer between two envelopes."""
    model_config = ConfigDict(populate_by_name=True)

    from_envelope_id: int = Field(alias="fromEnvelopeId", gt=0, strict=True)
    to_envelope_id: int = Field(alias="toEnvelopeId", gt=0, strict=True)
    amount: float = Field(gt=0, strict=True)


class EnvelopeResponse(BaseModel):
    """Envelope response — public-facing envelope data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    category: str
    budget: float
    balance: float


class TransferResponse(BaseModel):
    """Both envelopes after a transfer, keyed "from" and "to"."""
    model_config = ConfigDict(populate_by_name=True)

    from_envelope: EnvelopeResponse = Field(alias="from")
    to_envelope: EnvelopeResponse = Field(alias="to")

    @classmethod
    def from_result(cls, result: TransferResult) -> "TransferResponse":
        return cls(
            from_envelope=EnvelopeResponse.model_validate(result.from_envelope),
            to_envelope=EnvelopeResponse.model_validate(result.to_envelope),
        )


class LedgerSummaryResponse(BaseModel):
    """Aggregate budget figures."""
    model_config = ConfigDict(from_attributes=True)

    total_budget: float
    used_budget: float
    remaining_budget: float
    total_available_balance: float
    envelope_count: int


def to_envelope_response(envelope: Envelope) -> EnvelopeResponse:
    return EnvelopeResponse.model_validate(envelope)


def to_summary_response(summary: LedgerSummary) -> LedgerSummaryResponse:
    return LedgerSummaryResponse.model_validate(summary)
