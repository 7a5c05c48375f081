"""Mini README: Append-only expense ledger with local persistence.

Structure:
    * ExpenseRecord - immutable dataclass for a single expense entry.
    * format_amount - renders amounts as ``$`` plus two decimals.
    * Ledger - ordered records, running total, load and persist helpers.

The ledger keeps records in insertion order and never edits or removes
them. Every ``append`` re-encodes the full list and overwrites the
``"expenses"`` key of the preference store. Storage problems never reach the
caller: a failed load leaves the ledger empty and a failed persist keeps
the in-memory records, both logged as warnings.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..logging_utils import get_logger
from ..storage import PreferenceStore

LOGGER = get_logger(__name__)

EXPENSES_KEY = "expenses"


@dataclass(frozen=True, slots=True)
class ExpenseRecord:
    """Represent a recorded expense."""

    id: str
    amount: Decimal
    description: str
    category: str

    def as_dict(self) -> Dict[str, object]:
        """Export the record with JSON friendly values."""

        return {
            "id": self.id,
            "amount": float(self.amount),
            "description": self.description,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, payload: object) -> "ExpenseRecord":
        """Rebuild a record from a decoded JSON object."""

        if not isinstance(payload, dict):
            raise ValueError("Expense entries must be JSON objects")
        try:
            record_id = payload["id"]
            raw_amount = payload["amount"]
            description = payload["description"]
            category = payload["category"]
        except KeyError as error:
            raise ValueError(f"Expense entry is missing field {error}") from error
        if not all(isinstance(value, str) for value in (record_id, description, category)):
            raise ValueError("Expense id, description and category must be strings")
        if isinstance(raw_amount, bool) or not isinstance(raw_amount, (int, float, Decimal)):
            raise ValueError(f"Expense amount must be a number, got {raw_amount!r}")
        try:
            amount = Decimal(str(raw_amount))
        except InvalidOperation as error:
            raise ValueError(f"Expense amount {raw_amount!r} is not a number") from error
        if not amount.is_finite():
            raise ValueError(f"Expense amount {raw_amount!r} is not finite")
        return cls(id=record_id, amount=amount, description=description, category=category)


def format_amount(amount: Decimal) -> str:
    """Return ``$`` followed by the amount rounded to two decimals."""

    return f"${amount:.2f}"


def _to_decimal(amount: Union[Decimal, int, float, str]) -> Decimal:
    """Coerce an amount, reading floats by their shortest repr."""

    if isinstance(amount, float):
        return Decimal(repr(amount))
    return Decimal(amount)


def _amount_token(amount: Decimal) -> str:
    """Render a decimal as an exact JSON number token."""

    if not amount.is_finite():
        raise ValueError(f"Cannot store non-finite amount {amount}")
    return str(amount)


def encode_records(records: Iterable[ExpenseRecord]) -> str:
    """Serialise records to the persisted JSON array.

    Amounts are written with their exact decimal digits rather than through
    ``float`` so a reload reproduces them digit for digit.
    """

    entries = []
    for record in records:
        entries.append(
            "{"
            f'"id": {json.dumps(record.id)}, '
            f'"amount": {_amount_token(record.amount)}, '
            f'"description": {json.dumps(record.description)}, '
            f'"category": {json.dumps(record.category)}'
            "}"
        )
    return "[" + ", ".join(entries) + "]"


def decode_records(raw: str) -> List[ExpenseRecord]:
    """Parse the persisted JSON array, raising ``ValueError`` on bad input."""

    try:
        payload = json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError as error:
        raise ValueError("Persisted expenses are not valid JSON") from error
    if not isinstance(payload, list):
        raise ValueError("Persisted expenses must be a JSON array")
    return [ExpenseRecord.from_dict(entry) for entry in payload]


class Ledger:
    """Hold expense records in order and mirror them to a preference store."""

    def __init__(
        self,
        store: PreferenceStore,
        *,
        key: str = EXPENSES_KEY,
        records: Optional[Iterable[ExpenseRecord]] = None,
    ) -> None:
        self._store = store
        self._key = key
        self._records: List[ExpenseRecord] = list(records or [])
        LOGGER.debug("Ledger initialised with %s records under key '%s'", len(self._records), key)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(list(self._records))

    def records(self) -> List[ExpenseRecord]:
        """Return a copy of the records in insertion order."""

        return list(self._records)

    def append(self, amount: Union[Decimal, int, float], description: str, category: str) -> ExpenseRecord:
        """Record a new expense and persist the ledger."""

        record = ExpenseRecord(
            id=str(uuid.uuid4()),
            amount=_to_decimal(amount),
            description=description,
            category=category,
        )
        self._records.append(record)
        LOGGER.info(
            "Appended expense %s (%s, %s) - %s records",
            record.id,
            format_amount(record.amount),
            record.category,
            len(self._records),
        )
        self.persist()
        return record

    def total(self) -> Decimal:
        """Sum every amount; zero for an empty ledger."""

        return sum((record.amount for record in self._records), Decimal("0"))

    def load(self) -> List[ExpenseRecord]:
        """Replace the in-memory records with the persisted ones."""

        self._records = []
        try:
            raw = self._store.get(self._key)
        except (OSError, ValueError) as error:
            LOGGER.warning("Could not read persisted expenses: %s", error)
            return []
        if raw is None:
            LOGGER.debug("No persisted expenses under key '%s'", self._key)
            return []
        try:
            records = decode_records(raw)
        except ValueError as error:
            LOGGER.warning("Ignoring unreadable persisted expenses: %s", error)
            return []
        self._records = records
        LOGGER.debug("Loaded %s persisted expenses", len(records))
        return list(records)

    def persist(self) -> bool:
        """Write the full ledger to the store; ``False`` when that failed."""

        try:
            self._store.set(self._key, encode_records(self._records))
        except (OSError, TypeError, ValueError):
            LOGGER.warning("Failed to persist %s expenses", len(self._records), exc_info=True)
            return False
        return True

    def export_snapshot(self) -> Dict[str, object]:
        """Export rows and the formatted total for JSON responses."""

        return {
            "records": [
                dict(record.as_dict(), formatted_amount=format_amount(record.amount))
                for record in self._records
            ],
            "total": format_amount(self.total()),
        }
