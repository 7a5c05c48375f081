"""Mini README: Category labels offered by the expense form.

The ``registry`` module holds the mutable label list, the sentinel options
that open the editing flows and the picker's selection state machine.
"""

from .registry import (
    ADD_NEW_CATEGORY,
    DEFAULT_CATEGORIES,
    MANAGE_CATEGORIES,
    SENTINELS,
    CategoryRegistry,
    CategorySelection,
    NoMatch,
    OpenManagementFlow,
    Selected,
    SelectionOutcome,
    SelectionState,
)

__all__ = [
    "ADD_NEW_CATEGORY",
    "CategoryRegistry",
    "CategorySelection",
    "DEFAULT_CATEGORIES",
    "MANAGE_CATEGORIES",
    "NoMatch",
    "OpenManagementFlow",
    "SENTINELS",
    "Selected",
    "SelectionOutcome",
    "SelectionState",
]
