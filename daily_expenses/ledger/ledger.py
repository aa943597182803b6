"""Mini README: Session-scoped, in-memory expense ledger.

Structure:
    * Expense - frozen dataclass describing one recorded expense.
    * NotFound - returned by ``delete`` when the identifier is unknown.
    * ChangeKind / LedgerChange - payload handed to change observers.
    * LedgerStatistics - derived figures for dashboards and logging.
    * ExpenseLedger - owns the records and exposes add/delete/clear/queries.

The ledger lives exactly as long as the object that owns it; nothing is
written to disk. Insertion order is the only stored order, so every
derived view (display order, totals, statistics) is recomputed from the
records on request. Failed operations are returned as values rather than
raised and leave the records untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..logging_utils import get_logger
from .validator import CENT, ExpenseValidator, RejectionReason

LOGGER = get_logger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True, slots=True)
class Expense:
    """A validated expense record."""

    expense_id: str
    description: str
    amount: Decimal
    spent_on: date
    created_at: datetime

    def as_dict(self) -> Dict[str, object]:
        """Export the expense with JSON friendly values."""

        return {
            "expense_id": self.expense_id,
            "description": self.description,
            "amount": str(self.amount),
            "spent_on": self.spent_on.isoformat(),
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class NotFound:
    """Signals that no expense matched the requested identifier."""

    expense_id: str

    @property
    def message(self) -> str:
        return "Error: Expense not found"


class ChangeKind(str, Enum):
    """Enumerate the mutations observers are told about."""

    ADDED = "added"
    DELETED = "deleted"
    CLEARED = "cleared"


@dataclass(frozen=True, slots=True)
class LedgerChange:
    """Notification sent after a successful mutation."""

    kind: ChangeKind
    expense: Optional[Expense]
    remaining: int


ChangeListener = Callable[[LedgerChange], None]


@dataclass(frozen=True, slots=True)
class LedgerStatistics:
    """Aggregate figures over the current records."""

    count: int = 0
    total: Decimal = ZERO
    average: Decimal = ZERO
    maximum: Decimal = ZERO
    minimum: Decimal = ZERO
    today_count: int = 0
    today_total: Decimal = ZERO

    def as_dict(self) -> Dict[str, object]:
        return {
            "count": self.count,
            "total": str(self.total),
            "average": str(self.average),
            "max": str(self.maximum),
            "min": str(self.minimum),
            "today_count": self.today_count,
            "today_total": str(self.today_total),
        }


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


class ExpenseLedger:
    """Own the session's expenses and derive views from them."""

    def __init__(
        self,
        validator: Optional[ExpenseValidator] = None,
        *,
        today: Callable[[], date] = date.today,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.validator = validator or ExpenseValidator(today=today)
        self._today = today
        self._clock = clock
        self._expenses: List[Expense] = []
        self._sequence = 0
        self._listeners: List[ChangeListener] = []
        LOGGER.debug("Expense ledger initialised for a new session")

    def __len__(self) -> int:
        return len(self._expenses)

    def today(self) -> date:
        """Current calendar day as seen by this ledger."""

        return self._today()

    def _next_id(self) -> str:
        """Generate a session-unique expense identifier."""

        self._sequence += 1
        return f"exp_{self._sequence:04d}"

    # Observers -----------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener`` for change notifications.

        Returns a callable that removes the listener again.
        """

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: ChangeKind, expense: Optional[Expense] = None) -> None:
        change = LedgerChange(kind=kind, expense=expense, remaining=len(self._expenses))
        for listener in list(self._listeners):
            listener(change)

    # Mutations -----------------------------------------------------------

    def add(
        self, description: object, amount: object, spent_on: object
    ) -> Union[Expense, RejectionReason]:
        """Validate and record a new expense.

        Returns the stored ``Expense`` or the ``RejectionReason`` of the first
        rule that failed; a rejected entry leaves the ledger unchanged.
        """

        result = self.validator.validate(description, amount, spent_on)
        if not result.accepted:
            LOGGER.info("Rejected expense '%s': %s", description, result.reason.value)
            return result.reason

        expense = Expense(
            expense_id=self._next_id(),
            description=result.description,
            amount=result.amount,
            spent_on=result.spent_on,
            created_at=self._clock(),
        )
        self._expenses.append(expense)
        LOGGER.info(
            "Expense added %s '%s' %s on %s (%s in session)",
            expense.expense_id,
            expense.description,
            expense.amount,
            expense.spent_on.isoformat(),
            len(self._expenses),
        )
        self._notify(ChangeKind.ADDED, expense)
        return expense

    def delete(self, expense_id: str) -> Union[Expense, NotFound]:
        """Remove the expense with ``expense_id`` and return it."""

        for index, expense in enumerate(self._expenses):
            if expense.expense_id == expense_id:
                del self._expenses[index]
                LOGGER.info(
                    "Expense deleted %s, %s remaining", expense_id, len(self._expenses)
                )
                self._notify(ChangeKind.DELETED, expense)
                return expense
        LOGGER.warning("Expense not found: %s", expense_id)
        return NotFound(expense_id)

    def clear(self) -> int:
        """Drop every expense. Returns how many were removed."""

        removed = len(self._expenses)
        self._expenses = []
        LOGGER.info("All expenses cleared (%s removed)", removed)
        self._notify(ChangeKind.CLEARED)
        return removed

    # Queries -------------------------------------------------------------

    def list_expenses(self) -> List[Expense]:
        """Return the expenses in insertion order."""

        return list(self._expenses)

    def get_expense(self, expense_id: str) -> Expense:
        """Retrieve an expense, raising informative errors when missing."""

        for expense in self._expenses:
            if expense.expense_id == expense_id:
                return expense
        raise KeyError(f"Expense {expense_id} not found")

    def total(self) -> Decimal:
        """Sum of all current amounts."""

        return _sum(expense.amount for expense in self._expenses)

    def sorted_for_display(self) -> List[Expense]:
        """Newest calendar date first; same-day entries newest-added first."""

        ordered = sorted(
            enumerate(self._expenses),
            key=lambda item: (item[1].spent_on, item[1].created_at, item[0]),
            reverse=True,
        )
        return [expense for _, expense in ordered]

    def statistics(self) -> LedgerStatistics:
        """Aggregate count, total, average, extremes and today's subset."""

        if not self._expenses:
            return LedgerStatistics()

        amounts = [expense.amount for expense in self._expenses]
        total = _sum(amounts)
        today = self.today()
        todays = [expense.amount for expense in self._expenses if expense.spent_on == today]
        return LedgerStatistics(
            count=len(amounts),
            total=total,
            average=(total / len(amounts)).quantize(CENT, rounding=ROUND_HALF_UP),
            maximum=max(amounts),
            minimum=min(amounts),
            today_count=len(todays),
            today_total=_sum(todays),
        )

    def export_snapshot(self) -> Dict[str, object]:
        """Export records, statistics and the export instant for inspection."""

        return {
            "expenses": [expense.as_dict() for expense in self._expenses],
            "statistics": self.statistics().as_dict(),
            "exported_at": self._clock().isoformat(),
        }
