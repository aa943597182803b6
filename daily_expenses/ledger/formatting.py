"""Mini README: Display helpers for dates and amounts.

Structure:
    * format_date_label - "Today", "Yesterday" or "Sat, Jun 15, 2024".
    * format_amount - currency-prefixed two-decimal amount string.

Both helpers are pure and compare calendar days only, so no time-of-day
or timezone offset can shift a label.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

CENT = Decimal("0.01")


def format_date_label(value: Union[date, datetime], today: Optional[date] = None) -> str:
    """Return a friendly label for ``value`` relative to ``today``."""

    day = value.date() if isinstance(value, datetime) else value
    today = today or date.today()
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{day:%a, %b} {day.day}, {day.year}"


def format_amount(amount: Union[Decimal, int, float], currency_symbol: str = "$") -> str:
    """Render ``amount`` with two decimals, e.g. ``$1200.00``."""

    quantised = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{currency_symbol}{quantised:.2f}"
