"""Mini README: Category registry and selection state for the expense form.

Structure:
    * DEFAULT_CATEGORIES - labels every new registry starts from.
    * MANAGE_CATEGORIES / ADD_NEW_CATEGORY - sentinel options per flow.
    * Selected / OpenManagementFlow / NoMatch - outcomes of ``select``.
    * CategoryRegistry - ordered, mutable list of labels.
    * SelectionState / CategorySelection - the form's selection pointer.

The registry is deliberately not persisted; each registry starts from the
defaults. Duplicate labels are allowed. The sentinel is rendered as the last
option of the picker and is never stored as a category.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Union

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_CATEGORIES = ("Food", "Socializing", "Transport", "Shopping", "Other")
MANAGE_CATEGORIES = "Manage Categories"
ADD_NEW_CATEGORY = "Add New Category"
SENTINELS = frozenset({MANAGE_CATEGORIES, ADD_NEW_CATEGORY})


@dataclass(frozen=True, slots=True)
class Selected:
    """A real category was chosen."""

    name: str


@dataclass(frozen=True, slots=True)
class OpenManagementFlow:
    """The sentinel was chosen; the caller clears the selection."""


@dataclass(frozen=True, slots=True)
class NoMatch:
    """The name is neither the sentinel nor a registry entry."""

    name: str


SelectionOutcome = Union[Selected, OpenManagementFlow, NoMatch]


class CategoryRegistry:
    """Ordered category labels offered by the form."""

    def __init__(
        self,
        categories: Optional[Iterable[str]] = None,
        *,
        sentinel: str = MANAGE_CATEGORIES,
    ) -> None:
        self._categories: List[str] = list(DEFAULT_CATEGORIES if categories is None else categories)
        self.sentinel = sentinel
        LOGGER.debug("Category registry initialised with %s entries", len(self._categories))

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def names(self) -> List[str]:
        """Return the labels in display order."""

        return list(self._categories)

    def options(self) -> List[str]:
        """Return the picker options: every label followed by the sentinel."""

        return [*self._categories, self.sentinel]

    def add(self, name: str) -> bool:
        """Append ``name``; empty names are ignored."""

        if not name:
            return False
        self._categories.append(name)
        LOGGER.info("Added category '%s'", name)
        return True

    def rename(self, index: int, new_name: str) -> bool:
        """Replace the label at ``index``; empty names are ignored."""

        self._check_index(index)
        if not new_name:
            return False
        previous = self._categories[index]
        self._categories[index] = new_name
        LOGGER.info("Renamed category %s '%s' -> '%s'", index, previous, new_name)
        return True

    def delete(self, indices: Iterable[int]) -> List[str]:
        """Remove the labels at every position in ``indices``."""

        positions = set(indices)
        for index in positions:
            self._check_index(index)
        removed = [name for position, name in enumerate(self._categories) if position in positions]
        self._categories = [
            name for position, name in enumerate(self._categories) if position not in positions
        ]
        LOGGER.info("Deleted categories %s", removed)
        return removed

    def select(self, name: str) -> SelectionOutcome:
        """Classify a picker choice."""

        if name == self.sentinel:
            return OpenManagementFlow()
        if name in self._categories:
            return Selected(name)
        return NoMatch(name)

    def reset(self) -> None:
        """Restore the default labels."""

        self._categories = list(DEFAULT_CATEGORIES)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._categories):
            raise IndexError(f"Category position {index} is out of range")


class SelectionState(str, Enum):
    """States of the category picker."""

    IDLE = "idle"
    SELECTED = "selected"
    ADDING_NEW = "adding_new"
    MANAGING = "managing"


class CategorySelection:
    """Track the picker's current category and any open editing flow.

    ``inline`` chooses which state the sentinel opens: ``ADDING_NEW`` for the
    text entry embedded in the form, ``MANAGING`` for the separate screen.
    """

    def __init__(self, registry: CategoryRegistry, *, inline: bool = False) -> None:
        self.registry = registry
        self.inline = inline
        self.state = SelectionState.IDLE
        self._name = ""

    @property
    def current(self) -> str:
        """Selected label, or an empty string."""

        return self._name

    @property
    def is_concrete(self) -> bool:
        """True when the pointer names a label still present in the registry."""

        return (
            self.state is SelectionState.SELECTED
            and bool(self._name)
            and self._name not in SENTINELS
            and self._name in self.registry
        )

    def choose(self, name: str) -> SelectionOutcome:
        outcome = self.registry.select(name)
        if isinstance(outcome, OpenManagementFlow):
            self._clear()
            self.state = SelectionState.ADDING_NEW if self.inline else SelectionState.MANAGING
        elif isinstance(outcome, Selected):
            self._name = outcome.name
            self.state = SelectionState.SELECTED
        else:
            self._clear()
        LOGGER.debug("Category choice %r -> %s", name, self.state.value)
        return outcome

    def confirm(self, name: str) -> bool:
        """Finish the inline entry by adding and selecting ``name``."""

        if self.state is not SelectionState.ADDING_NEW or not name:
            return False
        self.registry.add(name)
        self._name = name
        self.state = SelectionState.SELECTED
        return True

    def cancel(self) -> None:
        """Abandon an open editing flow."""

        if self.state in (SelectionState.ADDING_NEW, SelectionState.MANAGING):
            self._clear()

    def finish(self) -> None:
        """Return from the management screen to the form."""

        self.cancel()

    def clear(self) -> None:
        self._clear()

    def follow_rename(self, previous: str, new_name: str) -> None:
        """Keep the pointer on an entry renamed underneath it.

        A duplicate still carrying ``previous`` keeps the selection as is.
        """

        if (
            self.state is SelectionState.SELECTED
            and self._name == previous
            and previous not in self.registry
        ):
            self._name = new_name

    def follow_delete(self, removed: Sequence[str]) -> None:
        """Drop the pointer when its entry disappeared."""

        if self.state is SelectionState.SELECTED and self._name in removed and self._name not in self.registry:
            self._clear()

    def _clear(self) -> None:
        self._name = ""
        self.state = SelectionState.IDLE
