"""Mini README: Field state and validation for the add-expense form.

Structure:
    * parse_amount - strict decimal parser used by the amount field.
    * ExpenseForm - the amount and description text, the category picker
      state, the validity flags and the submit gate.

Invalid amounts are only flagged; nothing is raised and the text remains
editable. Submitting is a no-op unless every field is acceptable.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from ..categories import CategorySelection
from ..finance import ExpenseRecord, Ledger
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


def parse_amount(text: str) -> Optional[Decimal]:
    """Return the decimal in ``text`` or ``None``.

    NaN, infinity and values beyond the range of a double (``1e400``) are
    refused.
    """

    candidate = text.strip()
    if not candidate or "_" in candidate:
        return None
    try:
        amount = Decimal(candidate)
    except InvalidOperation:
        return None
    if not amount.is_finite() or not math.isfinite(float(amount)):
        return None
    return amount


class ExpenseForm:
    """Hold the three inputs of the add-expense form."""

    def __init__(self, selection: CategorySelection) -> None:
        self.amount_text = ""
        self.description = ""
        self.selection = selection

    @property
    def category(self) -> str:
        return self.selection.current

    @property
    def amount_invalid(self) -> bool:
        """Drives the red border: typed text that does not parse."""

        return bool(self.amount_text) and parse_amount(self.amount_text) is None

    @property
    def can_submit(self) -> bool:
        return (
            bool(self.amount_text)
            and parse_amount(self.amount_text) is not None
            and bool(self.description)
            and self.selection.is_concrete
        )

    def submit(self, ledger: Ledger) -> Optional[ExpenseRecord]:
        """Append the entry to ``ledger`` and clear the form when valid."""

        if not self.can_submit:
            LOGGER.debug("Submit ignored; form incomplete: %s", self.as_dict())
            return None
        amount = parse_amount(self.amount_text)
        record = ledger.append(amount, self.description, self.category)
        self.clear()
        return record

    def clear(self) -> None:
        self.amount_text = ""
        self.description = ""
        self.selection.clear()

    def as_dict(self) -> Dict[str, object]:
        return {
            "amount": self.amount_text,
            "description": self.description,
            "category": self.category,
            "selection_state": self.selection.state.value,
            "amount_invalid": self.amount_invalid,
            "can_submit": self.can_submit,
        }
