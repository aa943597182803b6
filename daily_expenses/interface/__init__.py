"""Mini README: Interactive interfaces for the daily expense tracker.

Exports the FastAPI application factory that powers the browser page.
"""

from .web_app import create_application

__all__ = ["create_application"]
