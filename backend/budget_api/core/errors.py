"""Error Hierarchy — typed, categorized exceptions for every ledger failure mode.

Invariants:
    - Every error has a code (str), kind (ErrorKind), category (ErrorCategory), severity (ErrorSeverity)
    - Ledger errors are raised before any mutation (no partial state leaks)
    - to_response() produces the REST error envelope; core never imports FastAPI
    - No transport concepts: HTTP status is chosen by the shell from ErrorKind

Design Decisions:
    - Single hierarchy with BudgetError base: one FastAPI handler catches all (ADR: uniform error shape)
    - ErrorKind enum over message matching: handler dispatches on kind, not substrings
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """The five ledger failure kinds. One subclass per kind."""
    VALIDATION = "validation"
    DUPLICATE_CATEGORY = "duplicate_category"
    BUDGET_EXCEEDED = "budget_exceeded"
    NOT_FOUND = "not_found"
    INSUFFICIENT_BALANCE = "insufficient_balance"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    envelope_id: int | None = None
    field_name: str | None = None


class BudgetError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "kind": self.kind.value,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "envelope_id": self.context.envelope_id,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Ledger Errors (4xx) ────────────────────────────────────────

class ValidationError(BudgetError):
    """Malformed or out-of-range input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorKind.VALIDATION,
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, ctx,
        )
        self.field = field


class DuplicateCategoryError(BudgetError):
    """Category already used by another envelope (case-insensitive)."""
    def __init__(self, category: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = "category"
        super().__init__(
            f"An envelope with category '{category}' already exists",
            "DUPLICATE_CATEGORY", ErrorKind.DUPLICATE_CATEGORY,
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, ctx,
        )
        self.category_name = category


class BudgetExceededError(BudgetError):
    """Sum of envelope budgets would exceed the total budget."""
    def __init__(
        self, requested: float, available: float, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Budget {requested} exceeds the remaining total budget ({available})",
            "BUDGET_EXCEEDED", ErrorKind.BUDGET_EXCEEDED,
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.ERROR, context,
        )
        self.requested = requested
        self.available = available


class NotFoundError(BudgetError):
    """No envelope with the requested id."""
    def __init__(self, envelope_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.envelope_id = envelope_id
        super().__init__(
            f"Envelope with ID {envelope_id} not found",
            "ENVELOPE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx,
        )
        self.envelope_id = envelope_id


class InsufficientBalanceError(BudgetError):
    """Operation would drive an envelope balance below zero."""
    def __init__(
        self, envelope_id: int, balance: float, required: float,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.envelope_id = envelope_id
        super().__init__(
            f"Envelope {envelope_id} has insufficient balance "
            f"({balance} available, {required} required)",
            "INSUFFICIENT_BALANCE", ErrorKind.INSUFFICIENT_BALANCE,
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.ERROR, ctx,
        )
        self.envelope_id = envelope_id
        self.balance = balance
        self.required = required
