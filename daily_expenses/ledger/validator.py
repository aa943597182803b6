"""Mini README: Input validation for candidate expense entries.

Structure:
    * RejectionReason - enum of the specific reasons an entry can be refused.
    * ValidationRules - limits applied by the validator, built from settings.
    * ValidationResult - accepted values or the first rejection reason.
    * ExpenseValidator - applies the rules in a fixed order.

Rules are evaluated in order and the first failure wins: description,
description length, amount, amount ceiling, date presence, future date.
The validator never raises for bad input and never touches the ledger; the
only outside input is the "today" provider, which tests replace with a
fixed date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Callable, Optional

from ..configuration import ExpenseTrackerSettings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CENT = Decimal("0.01")


class RejectionReason(str, Enum):
    """Enumerate why a candidate expense was refused."""

    EMPTY_DESCRIPTION = "empty_description"
    DESCRIPTION_TOO_LONG = "description_too_long"
    INVALID_AMOUNT = "invalid_amount"
    AMOUNT_TOO_LARGE = "amount_too_large"
    MISSING_DATE = "missing_date"
    FUTURE_DATE = "future_date"

    @property
    def message(self) -> str:
        """User-facing explanation suitable for a notification."""

        return _MESSAGES[self]


_MESSAGES = {
    RejectionReason.EMPTY_DESCRIPTION: "Please enter a description",
    RejectionReason.DESCRIPTION_TOO_LONG: "Description too long (max 100 characters)",
    RejectionReason.INVALID_AMOUNT: "Please enter a valid amount greater than 0",
    RejectionReason.AMOUNT_TOO_LARGE: "Amount is too large",
    RejectionReason.MISSING_DATE: "Please select a date",
    RejectionReason.FUTURE_DATE: "Date cannot be in the future",
}


@dataclass(frozen=True, slots=True)
class ValidationRules:
    """Limits enforced on every new expense."""

    max_description_length: int = 100
    max_amount: Decimal = Decimal("999999.99")
    future_date_cutoff_days: int = 1

    @classmethod
    def from_settings(cls, settings: ExpenseTrackerSettings) -> "ValidationRules":
        return cls(
            max_description_length=settings.max_description_length,
            max_amount=settings.max_amount,
            future_date_cutoff_days=settings.future_date_cutoff_days,
        )


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one candidate entry."""

    description: str = ""
    amount: Decimal = Decimal("0.00")
    spent_on: Optional[date] = None
    reason: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "ValidationResult":
        return cls(reason=reason)


def parse_amount(value: object) -> Optional[Decimal]:
    """Coerce user input into an unrounded ``Decimal``.

    Returns ``None`` for anything that is not a finite number. Floats go
    through ``str`` first so ``4.5`` becomes ``Decimal("4.5")`` rather
    than its binary expansion.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    if not amount.is_finite():
        return None
    return amount


def to_cents(amount: Decimal) -> Decimal:
    """Give whole-cent amounts two places; finer amounts keep their digits.

    ``4.5`` becomes ``4.50`` while ``0.004`` stays ``0.004``, so a stored
    amount is always exactly the value that passed validation. Displays
    round with ``format_amount``.
    """

    cents = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    return cents if cents == amount else amount


def parse_calendar_date(value: object) -> Optional[date]:
    """Return a calendar date from dates, datetimes, or ISO strings."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


class ExpenseValidator:
    """Check candidate entries against ``ValidationRules``."""

    def __init__(
        self,
        rules: Optional[ValidationRules] = None,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.rules = rules or ValidationRules()
        self._today = today

    def validate(self, description: object, amount: object, spent_on: object) -> ValidationResult:
        """Return the normalised values or the first rule that failed."""

        text = description.strip() if isinstance(description, str) else ""
        if not text:
            return self._reject(RejectionReason.EMPTY_DESCRIPTION)
        if len(text) > self.rules.max_description_length:
            return self._reject(RejectionReason.DESCRIPTION_TOO_LONG)

        parsed_amount = parse_amount(amount)
        if parsed_amount is None or parsed_amount <= 0:
            return self._reject(RejectionReason.INVALID_AMOUNT)
        if parsed_amount > self.rules.max_amount:
            return self._reject(RejectionReason.AMOUNT_TOO_LARGE)

        parsed_date = parse_calendar_date(spent_on)
        if parsed_date is None:
            return self._reject(RejectionReason.MISSING_DATE)
        cutoff = self._today() + timedelta(days=self.rules.future_date_cutoff_days)
        if parsed_date >= cutoff:
            return self._reject(RejectionReason.FUTURE_DATE)

        LOGGER.debug("Validation passed for '%s' (%s on %s)", text, parsed_amount, parsed_date)
        return ValidationResult(
            description=text, amount=to_cents(parsed_amount), spent_on=parsed_date
        )

    def explain(self, reason: RejectionReason) -> str:
        """Return the notification text for ``reason`` under these rules."""

        if reason is RejectionReason.DESCRIPTION_TOO_LONG:
            return f"Description too long (max {self.rules.max_description_length} characters)"
        return reason.message

    @staticmethod
    def _reject(reason: RejectionReason) -> ValidationResult:
        LOGGER.debug("Validation failed: %s", reason.value)
        return ValidationResult.rejected(reason)
