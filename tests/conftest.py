"""Mini README: Shared fixtures for the expense tracker tests.

Every ledger built here sees the same fixed "today" and a clock that
advances one second per call, so ordering and "today" statistics are
deterministic.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable

import pytest

from daily_expenses.ledger import ExpenseLedger

TODAY = date(2024, 6, 15)


def ticking_clock(start: datetime = datetime(2024, 6, 15, 9, 0, 0)) -> Callable[[], datetime]:
    """Return a clock that moves forward one second on every call."""

    state = {"now": start}

    def clock() -> datetime:
        state["now"] += timedelta(seconds=1)
        return state["now"]

    return clock


@pytest.fixture
def ledger() -> ExpenseLedger:
    return ExpenseLedger(today=lambda: TODAY, clock=ticking_clock())
