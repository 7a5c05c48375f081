"""Mini README: Core package initializer for Moneyflow.

Moneyflow is a single-screen expense tracker: an add-expense form, a
category picker and an append-only ledger saved to local key-value storage.
The package root only re-exports the logging helper so subpackages can be
imported without pulling in the web stack.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
