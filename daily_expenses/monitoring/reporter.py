"""Mini README: Periodic, read-only session statistics logging.

Structure:
    * StatisticsReporter - logs ledger statistics on a fixed interval.

The reporter only ever calls ``ExpenseLedger.statistics`` so it can run
alongside request handlers on the same event loop without changing any
state. Nothing is logged while the ledger is empty.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from ..ledger import ExpenseLedger, LedgerStatistics
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class StatisticsReporter:
    """Log a statistics line for ``ledger`` every ``interval_seconds``."""

    def __init__(self, ledger: ExpenseLedger, interval_seconds: float = 30.0) -> None:
        if interval_seconds < 0:
            raise ValueError("Statistics interval must not be negative.")
        self.ledger = ledger
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        return self.interval_seconds > 0

    def report_once(self) -> Optional[LedgerStatistics]:
        """Log the current statistics; returns them, or ``None`` when empty."""

        if not len(self.ledger):
            return None
        statistics = self.ledger.statistics()
        LOGGER.info("Session statistics: %s", statistics.as_dict())
        return statistics

    async def run(self) -> None:
        """Report forever; cancel the task to stop."""

        while True:
            await asyncio.sleep(self.interval_seconds)
            self.report_once()

    def start(self) -> None:
        """Schedule ``run`` on the running event loop."""

        if not self.enabled or self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self.run())
        LOGGER.debug("Statistics reporter started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        LOGGER.debug("Statistics reporter stopped")
