"""Mini README: Expense ledger package.

Groups the validator, the in-memory ledger that owns a session's records,
and the display formatters used by the web interface. ``ExpenseLedger`` is
the primary public API; the interface layer subscribes to its change
notifications instead of reaching into its state.
"""

from .formatting import format_amount, format_date_label
from .ledger import (
    ChangeKind,
    Expense,
    ExpenseLedger,
    LedgerChange,
    LedgerStatistics,
    NotFound,
)
from .validator import ExpenseValidator, RejectionReason, ValidationResult, ValidationRules

__all__ = [
    "ChangeKind",
    "Expense",
    "ExpenseLedger",
    "ExpenseValidator",
    "LedgerChange",
    "LedgerStatistics",
    "NotFound",
    "RejectionReason",
    "ValidationResult",
    "ValidationRules",
    "format_amount",
    "format_date_label",
]
