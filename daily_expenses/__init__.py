"""Mini README: Core package initializer for the daily expense tracker.

The tracker keeps a single session's expenses in memory, validates new
entries, and serves a running total and sorted list through a small web
interface. Import ``ExpenseLedger`` for the data-owning API or
``get_logger`` for consistently formatted module loggers.
"""

from .ledger import ExpenseLedger
from .logging_utils import get_logger

__all__ = ["ExpenseLedger", "get_logger"]
