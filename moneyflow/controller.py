"""Mini README: Controller owning the expense screen's state.

Structure:
    * ExpenseFormController - owns one ledger, one category registry, the
      picker selection and the form; every mutating call notifies the
      registered ``on_change`` listeners with an event name.
    * build_controller - wires a controller from settings and a store.

Interfaces never touch the ledger or registry directly; they call the
controller and re-render from ``view_model`` after being notified (or after
the call returns).
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from .categories import (
    ADD_NEW_CATEGORY,
    MANAGE_CATEGORIES,
    CategoryRegistry,
    CategorySelection,
    SelectionOutcome,
)
from .configuration import CategoryFlow, MoneyflowSettings
from .finance import ExpenseRecord, Ledger, format_amount
from .forms import ExpenseForm
from .logging_utils import get_logger
from .storage import JsonFilePreferenceStore, PreferenceStore

LOGGER = get_logger(__name__)

ChangeListener = Callable[[str], None]


class ExpenseFormController:
    """Coordinate form input, categories and the persisted ledger."""

    def __init__(
        self,
        ledger: Ledger,
        *,
        registry: Optional[CategoryRegistry] = None,
        flow: CategoryFlow = CategoryFlow.MODAL,
    ) -> None:
        self.flow = CategoryFlow(flow)
        sentinel = ADD_NEW_CATEGORY if self.flow is CategoryFlow.INLINE else MANAGE_CATEGORIES
        self.ledger = ledger
        self.registry = registry if registry is not None else CategoryRegistry(sentinel=sentinel)
        self.registry.sentinel = sentinel
        self.selection = CategorySelection(self.registry, inline=self.flow is CategoryFlow.INLINE)
        self.form = ExpenseForm(self.selection)
        self._listeners: List[ChangeListener] = []

    def on_change(self, listener: ChangeListener) -> ChangeListener:
        """Register ``listener``; returns it so it can be used as a decorator."""

        self._listeners.append(listener)
        return listener

    def _notify(self, event: str) -> None:
        LOGGER.debug("State change: %s", event)
        for listener in list(self._listeners):
            listener(event)

    def activate(self) -> List[ExpenseRecord]:
        """Load the persisted ledger when the screen appears."""

        records = self.ledger.load()
        LOGGER.info("Screen activated with %s persisted expenses", len(records))
        self._notify("activated")
        return records

    def update_fields(
        self,
        *,
        amount: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        if amount is not None:
            self.form.amount_text = amount
        if description is not None:
            self.form.description = description
        self._notify("fields_updated")

    def choose_category(self, name: str) -> SelectionOutcome:
        outcome = self.selection.choose(name)
        self._notify("category_chosen")
        return outcome

    def confirm_new_category(self, name: str) -> bool:
        confirmed = self.selection.confirm(name)
        if confirmed:
            self._notify("category_added")
        return confirmed

    def cancel_category_flow(self) -> None:
        self.selection.cancel()
        self._notify("category_flow_cancelled")

    def finish_managing(self) -> None:
        self.selection.finish()
        self._notify("category_flow_finished")

    def add_category(self, name: str) -> bool:
        added = self.registry.add(name)
        if added:
            self._notify("category_added")
        return added

    def rename_category(self, index: int, new_name: str) -> bool:
        previous = self.registry.names()[index] if 0 <= index < len(self.registry) else None
        renamed = self.registry.rename(index, new_name)
        if renamed and previous is not None:
            self.selection.follow_rename(previous, new_name)
            self._notify("category_renamed")
        return renamed

    def delete_categories(self, indices: Iterable[int]) -> List[str]:
        removed = self.registry.delete(indices)
        self.selection.follow_delete(removed)
        self._notify("categories_deleted")
        return removed

    def submit(self) -> Optional[ExpenseRecord]:
        """Append the form's entry to the ledger when it is submittable."""

        record = self.form.submit(self.ledger)
        if record is not None:
            self._notify("expense_added")
        return record

    def rows(self) -> List[Dict[str, str]]:
        """Display rows: description, category and formatted amount."""

        return [
            {
                "id": record.id,
                "description": record.description,
                "category": record.category,
                "amount": format_amount(record.amount),
            }
            for record in self.ledger
        ]

    def view_model(self) -> Dict[str, object]:
        """Everything an interface needs to render the screen."""

        return {
            "form": self.form.as_dict(),
            "flow": self.flow.value,
            "categories": self.registry.names(),
            "category_options": self.registry.options(),
            "sentinel": self.registry.sentinel,
            "rows": self.rows(),
            "total": format_amount(self.ledger.total()),
        }


def build_controller(
    settings: MoneyflowSettings,
    store: Optional[PreferenceStore] = None,
) -> ExpenseFormController:
    """Create a controller backed by the configured preferences file."""

    store = store or JsonFilePreferenceStore(settings.preferences_path)
    ledger = Ledger(store, key=settings.expenses_key)
    return ExpenseFormController(ledger, flow=settings.category_flow)
