"""Mini README: FastAPI-powered front end for the daily expense tracker.

Structure:
    * create_application - application factory wiring routes, templates and
      the periodic statistics reporter around one ledger instance.

The interface is the presentation adapter for ``ExpenseLedger``: it turns
form fields into ledger calls, maps rejection reasons onto HTTP errors
with actionable messages, and asks for explicit confirmation before any
destructive action. Each application owns exactly one ledger, so a
session ends when the process does.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from ..configuration import ExpenseTrackerSettings, get_settings
from ..ledger import (
    Expense,
    ExpenseLedger,
    ExpenseValidator,
    LedgerChange,
    NotFound,
    RejectionReason,
    ValidationRules,
    format_amount,
    format_date_label,
)
from ..logging_utils import get_logger
from ..monitoring import StatisticsReporter

LOGGER = get_logger(__name__)

SESSION_WARNING = "Data is not saved! All expenses will be cleared when you close this page."
CLEAR_PROMPT = "Clear all expenses? This cannot be undone!"


def create_application(
    ledger: Optional[ExpenseLedger] = None,
    settings: Optional[ExpenseTrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application around ``ledger`` (a fresh one by default)."""

    settings = settings or get_settings()
    if ledger is None:
        ledger = ExpenseLedger(ExpenseValidator(ValidationRules.from_settings(settings)))
    reporter = StatisticsReporter(ledger, settings.statistics_interval_seconds)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        reporter.start()
        LOGGER.info("Expense tracker session started (session-only, nothing is persisted)")
        yield
        await reporter.stop()
        LOGGER.info("Expense tracker session ended with %s expenses discarded", len(ledger))

    app = FastAPI(title="Daily Expense Tracker", version="0.1.0", lifespan=lifespan)
    app.state.ledger = ledger
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    session_state: Dict[str, object] = {"revision": 0, "last_change": None}

    def on_change(change: LedgerChange) -> None:
        session_state["revision"] = int(session_state["revision"]) + 1
        session_state["last_change"] = change.kind.value
        LOGGER.debug(
            "Ledger changed (%s), revision %s, %s expenses",
            change.kind.value,
            session_state["revision"],
            change.remaining,
        )

    ledger.subscribe(on_change)

    def money(amount) -> str:
        return format_amount(amount, settings.currency_symbol)

    def present(expense: Expense) -> Dict[str, object]:
        payload = expense.as_dict()
        payload["display_date"] = format_date_label(expense.spent_on, ledger.today())
        payload["display_amount"] = money(expense.amount)
        return payload

    def listing() -> Dict[str, object]:
        expenses: List[Dict[str, object]] = [
            present(expense) for expense in ledger.sorted_for_display()
        ]
        return {
            "expenses": expenses,
            "total": str(ledger.total()),
            "display_total": money(ledger.total()),
            "revision": session_state["revision"],
        }

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the expense list, running total and entry form."""

        LOGGER.debug("Rendering dashboard with %s expenses", len(ledger))
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "listing": listing(),
                "today": ledger.today().isoformat(),
                "messages": [SESSION_WARNING],
                "max_description_length": settings.max_description_length,
            },
        )

    @app.get("/expenses")
    async def list_expenses() -> JSONResponse:
        """Return expenses in display order together with the total."""

        return JSONResponse(listing())

    @app.post("/expenses")
    async def add_expense(
        description: str = Form(""),
        amount: str = Form(""),
        date: str = Form(""),
    ) -> JSONResponse:
        """Validate and record a submitted expense."""

        outcome = ledger.add(description, amount, date)
        if isinstance(outcome, RejectionReason):
            raise HTTPException(
                status_code=400,
                detail={"reason": outcome.value, "message": ledger.validator.explain(outcome)},
            )
        return JSONResponse(
            {
                "expense": present(outcome),
                "message": "Expense added successfully!",
                "display_total": money(ledger.total()),
            },
            status_code=201,
        )

    @app.post("/expenses/clear")
    async def clear_expenses(confirm: bool = Form(False)) -> JSONResponse:
        """Remove every expense once the user has confirmed."""

        if not confirm:
            raise HTTPException(status_code=409, detail={"confirm": CLEAR_PROMPT})
        removed = ledger.clear()
        return JSONResponse({"removed": removed, "message": "All expenses cleared"})

    @app.post("/expenses/{expense_id}/delete")
    async def delete_expense(expense_id: str, confirm: bool = Form(False)) -> JSONResponse:
        """Delete one expense once the user has confirmed."""

        if not confirm:
            try:
                expense = ledger.get_expense(expense_id)
            except KeyError as error:
                raise HTTPException(status_code=404, detail=NotFound(expense_id).message) from error
            prompt = f'Delete expense: "{expense.description}" ({money(expense.amount)})?'
            raise HTTPException(status_code=409, detail={"confirm": prompt})

        outcome = ledger.delete(expense_id)
        if isinstance(outcome, NotFound):
            raise HTTPException(status_code=404, detail=outcome.message)
        return JSONResponse({"expense": present(outcome), "message": "Expense deleted"})

    @app.get("/statistics")
    async def statistics() -> JSONResponse:
        """Return aggregate figures for the current session."""

        return JSONResponse(ledger.statistics().as_dict())

    @app.get("/export")
    async def export() -> JSONResponse:
        """Return a read-only snapshot of the session."""

        snapshot = ledger.export_snapshot()
        LOGGER.info("Exported snapshot with %s expenses", len(snapshot["expenses"]))
        return JSONResponse(snapshot)

    return app
