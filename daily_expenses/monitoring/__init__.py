"""Mini README: Background observability helpers.

Currently holds the periodic statistics reporter started by the web
interface's lifespan handler.
"""

from .reporter import StatisticsReporter

__all__ = ["StatisticsReporter"]
