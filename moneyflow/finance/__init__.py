"""Mini README: Expense bookkeeping for Moneyflow.

Groups the append-only ledger, the immutable record type and the currency
formatter shared by the controller, the web interface and the CLI.
"""

from .ledger import EXPENSES_KEY, ExpenseRecord, Ledger, format_amount

__all__ = ["EXPENSES_KEY", "ExpenseRecord", "Ledger", "format_amount"]
