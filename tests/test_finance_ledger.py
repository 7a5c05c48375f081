"""Mini README: Tests covering the append-only expense ledger.

Structure:
    * totals - exact sums including zero, negative and fractional amounts.
    * persistence - append persists, load replaces state, round trips keep
      ids and order, and broken storage degrades to an empty ledger.
"""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from moneyflow.finance import ExpenseRecord, Ledger, format_amount
from moneyflow.storage import MemoryPreferenceStore


class FailingStore(MemoryPreferenceStore):
    """Store whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


def test_total_is_zero_for_empty_ledger() -> None:
    ledger = Ledger(MemoryPreferenceStore())

    assert ledger.total() == Decimal("0")
    assert len(ledger) == 0


def test_total_sums_fractional_and_negative_amounts_exactly() -> None:
    """50.75 followed by a -10 refund leaves exactly 40.75."""

    ledger = Ledger(MemoryPreferenceStore())
    ledger.append(Decimal("50.75"), "Lunch", "Food")
    ledger.append(Decimal("-10"), "Refund", "Food")
    ledger.append(Decimal("0"), "Free sample", "Other")

    assert ledger.total() == Decimal("40.75")
    assert format_amount(ledger.total()) == "$40.75"


def test_append_preserves_earlier_records() -> None:
    ledger = Ledger(MemoryPreferenceStore())
    first = ledger.append(Decimal("12.5"), "Bus pass", "Transport")
    second = ledger.append(Decimal("3"), "Coffee", "Food")

    assert ledger.records() == [first, second]
    assert first.id != second.id
    with pytest.raises(AttributeError):
        first.amount = Decimal("1")  # type: ignore[misc]


def test_append_persists_full_array_under_expenses_key() -> None:
    store = MemoryPreferenceStore()
    ledger = Ledger(store)
    record = ledger.append(Decimal("8.25"), "Cinema", "Socializing")

    payload = json.loads(store.get("expenses"))
    assert payload == [
        {"id": record.id, "amount": 8.25, "description": "Cinema", "category": "Socializing"}
    ]


def test_load_round_trip_keeps_ids_order_and_total() -> None:
    store = MemoryPreferenceStore()
    ledger = Ledger(store)
    for amount, description, category in [
        ("50.75", "Lunch", "Food"),
        ("-10", "Refund", "Food"),
        ("200.00", "Flight", "Travel"),
    ]:
        ledger.append(Decimal(amount), description, category)
    assert ledger.persist() is True

    reloaded = Ledger(store)
    records = reloaded.load()

    assert records == ledger.records()
    assert reloaded.total() == ledger.total() == Decimal("240.75")


def test_load_replaces_in_memory_state() -> None:
    store = MemoryPreferenceStore()
    Ledger(store).append(Decimal("1"), "Stored", "Other")
    ledger = Ledger(
        store,
        records=[ExpenseRecord(id="local", amount=Decimal("99"), description="Unsaved", category="Food")],
    )

    ledger.load()

    assert [record.description for record in ledger] == ["Stored"]


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": "x"}',
        '[{"id": "x", "amount": "ten", "description": "d", "category": "c"}]',
        '[{"id": "x", "description": "d", "category": "c"}]',
    ],
)
def test_load_treats_unreadable_data_as_empty(raw: str) -> None:
    ledger = Ledger(MemoryPreferenceStore({"expenses": raw}))

    assert ledger.load() == []
    assert ledger.total() == Decimal("0")


def test_load_without_persisted_data_is_empty() -> None:
    assert Ledger(MemoryPreferenceStore()).load() == []


def test_persist_failure_is_swallowed_and_memory_kept() -> None:
    ledger = Ledger(FailingStore())

    record = ledger.append(Decimal("5"), "Snack", "Food")

    assert ledger.records() == [record]
    assert ledger.persist() is False


def test_export_snapshot_formats_amounts() -> None:
    ledger = Ledger(MemoryPreferenceStore())
    ledger.append(Decimal("200"), "Flight", "Travel")

    snapshot = ledger.export_snapshot()

    assert snapshot["total"] == "$200.00"
    assert snapshot["records"][0]["formatted_amount"] == "$200.00"
    assert snapshot["records"][0]["category"] == "Travel"


def test_high_precision_amount_survives_reload() -> None:
    store = MemoryPreferenceStore()
    ledger = Ledger(store)
    ledger.append(Decimal("12345678901234567.89"), "Yacht", "Shopping")

    reloaded = Ledger(store)
    reloaded.load()

    assert reloaded.records() == ledger.records()
    assert reloaded.total() == Decimal("12345678901234567.89")
    assert "12345678901234567.89" in store.get("expenses")


def test_float_amount_is_read_by_its_decimal_repr() -> None:
    store = MemoryPreferenceStore()
    ledger = Ledger(store)
    record = ledger.append(0.1, "Sticker", "Other")

    assert record.amount == Decimal("0.1")
    reloaded = Ledger(store)
    assert reloaded.load() == [record]


def test_non_finite_amount_is_never_written_over_good_data() -> None:
    store = MemoryPreferenceStore()
    ledger = Ledger(store)
    ledger.append(Decimal("5"), "Snack", "Food")
    saved = store.get("expenses")

    ledger.append(Decimal("Infinity"), "Typo", "Food")

    assert store.get("expenses") == saved
    assert [record.description for record in Ledger(store).load()] == ["Snack"]
