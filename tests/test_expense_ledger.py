"""Mini README: Tests covering the in-memory expense ledger.

Structure:
    * scenario tests - Coffee/Lunch/Rent walkthroughs from everyday use.
    * mutation tests - add, delete, clear and their change notifications.
    * derived view tests - totals, display order and statistics.
"""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from daily_expenses.ledger import (
    ChangeKind,
    Expense,
    ExpenseLedger,
    NotFound,
    RejectionReason,
)

TODAY = date(2024, 6, 15)
YESTERDAY = TODAY - timedelta(days=1)
TOMORROW = TODAY + timedelta(days=1)


def test_single_coffee_updates_total_and_statistics(ledger: ExpenseLedger) -> None:
    """One valid expense should be reflected in every derived figure."""

    expense = ledger.add("Coffee", 4.50, TODAY)

    assert isinstance(expense, Expense)
    assert ledger.total() == Decimal("4.50")
    stats = ledger.statistics()
    assert stats.count == 1
    assert stats.average == Decimal("4.50")
    assert stats.today_count == 1
    assert stats.today_total == Decimal("4.50")


def test_same_day_entries_show_latest_first(ledger: ExpenseLedger) -> None:
    """Among equal dates the more recently added expense is listed first."""

    ledger.add("Coffee", 4.50, TODAY)
    ledger.add("Lunch", "12.00", TODAY)

    assert ledger.total() == Decimal("16.50")
    assert [e.description for e in ledger.sorted_for_display()] == ["Lunch", "Coffee"]


def test_newer_dates_are_listed_first(ledger: ExpenseLedger) -> None:
    """Display order is by calendar date descending regardless of insertion."""

    ledger.add("Rent", 1200, YESTERDAY)
    ledger.add("Coffee", 4.50, TODAY)

    assert [e.description for e in ledger.sorted_for_display()] == ["Coffee", "Rent"]


def test_identical_timestamps_fall_back_to_insertion_order() -> None:
    """Entries created within the same clock tick still sort latest-added first."""

    frozen = datetime(2024, 6, 15, 12, 0)
    ledger = ExpenseLedger(today=lambda: TODAY, clock=lambda: frozen)
    for name in ("first", "second", "third"):
        ledger.add(name, 1, TODAY)

    assert [e.description for e in ledger.sorted_for_display()] == ["third", "second", "first"]


def test_sorting_does_not_reorder_storage(ledger: ExpenseLedger) -> None:
    """The stored order remains insertion order after building the display list."""

    ledger.add("Old", 1, YESTERDAY - timedelta(days=3))
    ledger.add("New", 2, TODAY)
    ledger.sorted_for_display()

    assert [e.description for e in ledger.list_expenses()] == ["Old", "New"]


def test_future_date_is_rejected_without_side_effects(ledger: ExpenseLedger) -> None:
    """A rejected entry leaves the ledger untouched and does not notify."""

    changes = []
    ledger.subscribe(changes.append)

    outcome = ledger.add("Concert", 50, TOMORROW)

    assert outcome is RejectionReason.FUTURE_DATE
    assert len(ledger) == 0
    assert ledger.total() == Decimal("0.00")
    assert changes == []


def test_identifiers_are_unique(ledger: ExpenseLedger) -> None:
    """Identifiers are never reused, even after deletions."""

    first = ledger.add("A", 1, TODAY)
    ledger.delete(first.expense_id)
    second = ledger.add("B", 1, TODAY)
    third = ledger.add("C", 1, TODAY)

    assert len({first.expense_id, second.expense_id, third.expense_id}) == 3


def test_delete_returns_removed_expense(ledger: ExpenseLedger) -> None:
    """Deleting a known id removes exactly that record."""

    coffee = ledger.add("Coffee", 4.50, TODAY)
    lunch = ledger.add("Lunch", 12, TODAY)

    removed = ledger.delete(coffee.expense_id)

    assert removed == coffee
    assert ledger.list_expenses() == [lunch]
    assert ledger.total() == Decimal("12.00")


def test_delete_unknown_id_reports_not_found(ledger: ExpenseLedger) -> None:
    """Unknown ids are reported, never raised, and change nothing."""

    ledger.add("Coffee", 4.50, TODAY)
    changes = []
    ledger.subscribe(changes.append)

    outcome = ledger.delete("exp_9999")

    assert outcome == NotFound("exp_9999")
    assert len(ledger) == 1
    assert ledger.total() == Decimal("4.50")
    assert changes == []


def test_clear_empties_everything(ledger: ExpenseLedger) -> None:
    """Clearing drops every record and resets every derived view."""

    ledger.add("Coffee", 4.50, TODAY)
    ledger.add("Rent", 1200, YESTERDAY)

    assert ledger.clear() == 2
    assert ledger.total() == Decimal("0")
    assert ledger.sorted_for_display() == []
    assert ledger.statistics().count == 0


def test_records_cannot_be_mutated(ledger: ExpenseLedger) -> None:
    """Stored expenses are frozen."""

    expense = ledger.add("Coffee", 4.50, TODAY)

    with pytest.raises(AttributeError):
        expense.amount = Decimal("1.00")  # type: ignore[misc]


def test_get_expense_raises_for_unknown_id(ledger: ExpenseLedger) -> None:
    with pytest.raises(KeyError):
        ledger.get_expense("exp_0001")


def test_observers_receive_each_successful_mutation(ledger: ExpenseLedger) -> None:
    """Add, delete and clear notify subscribers; unsubscribing stops delivery."""

    changes = []
    unsubscribe = ledger.subscribe(changes.append)

    coffee = ledger.add("Coffee", 4.50, TODAY)
    ledger.add("Lunch", 12, TODAY)
    ledger.delete(coffee.expense_id)
    ledger.clear()
    unsubscribe()
    ledger.add("Ignored", 1, TODAY)

    assert [change.kind for change in changes] == [
        ChangeKind.ADDED,
        ChangeKind.ADDED,
        ChangeKind.DELETED,
        ChangeKind.CLEARED,
    ]
    assert changes[2].expense == coffee
    assert [change.remaining for change in changes] == [1, 2, 1, 0]


def test_statistics_on_empty_ledger_are_zero(ledger: ExpenseLedger) -> None:
    """No division by zero and zero extremes when nothing is recorded."""

    stats = ledger.statistics()

    assert stats.count == 0
    assert stats.total == stats.average == stats.maximum == stats.minimum == Decimal("0")
    assert stats.today_count == 0


def test_statistics_split_today_from_older_entries(ledger: ExpenseLedger) -> None:
    """Extremes span all records while the today subset only counts today."""

    ledger.add("Rent", 1200, YESTERDAY)
    ledger.add("Coffee", 4.50, TODAY)
    ledger.add("Lunch", 12, TODAY)

    stats = ledger.statistics()

    assert stats.count == 3
    assert stats.total == Decimal("1216.50")
    assert stats.average == Decimal("405.50")
    assert stats.maximum == Decimal("1200.00")
    assert stats.minimum == Decimal("4.50")
    assert stats.today_count == 2
    assert stats.today_total == Decimal("16.50")


def test_total_matches_sum_after_random_operations(ledger: ExpenseLedger) -> None:
    """Any sequence of adds and deletes keeps the total equal to the sum."""

    rng = random.Random(20240615)
    for _ in range(200):
        if ledger.list_expenses() and rng.random() < 0.4:
            victim = rng.choice(ledger.list_expenses())
            ledger.delete(victim.expense_id)
        else:
            added = ledger.add("item", f"{rng.randint(1, 99999) / 100:.2f}", TODAY)
            assert ledger.sorted_for_display().count(added) == 1
        expected = sum((e.amount for e in ledger.list_expenses()), Decimal("0"))
        assert ledger.total() == expected
        assert len(ledger.sorted_for_display()) == len(ledger)


def test_export_snapshot_is_a_pure_read(ledger: ExpenseLedger) -> None:
    """The snapshot carries records, statistics and an export instant."""

    ledger.add("Coffee", 4.50, TODAY)

    snapshot = ledger.export_snapshot()

    assert snapshot["expenses"][0]["description"] == "Coffee"
    assert snapshot["expenses"][0]["amount"] == "4.50"
    assert snapshot["statistics"]["count"] == 1
    assert datetime.fromisoformat(snapshot["exported_at"])
    assert len(ledger) == 1


def test_new_expense_appears_once_in_display_list(ledger: ExpenseLedger) -> None:
    """Each added expense is listed exactly once, whatever its date."""

    for offset, name in enumerate(["Rent", "Coffee", "Lunch", "Bus"]):
        expense = ledger.add(name, 3, TODAY - timedelta(days=offset % 2))
        assert ledger.sorted_for_display().count(expense) == 1
    assert len(ledger.sorted_for_display()) == 4


def test_average_rounds_half_up_to_cents(ledger: ExpenseLedger) -> None:
    """Averages round like every displayed amount: half a cent rounds up."""

    ledger.add("Gum", "0.02", TODAY)
    ledger.add("Mint", "0.03", TODAY)

    assert ledger.statistics().average == Decimal("0.03")
