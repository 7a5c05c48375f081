"""Mini README: Form state helpers for Moneyflow.

Exports the add-expense form and the amount parser used to flag invalid
input.
"""

from .expense_form import ExpenseForm, parse_amount

__all__ = ["ExpenseForm", "parse_amount"]
