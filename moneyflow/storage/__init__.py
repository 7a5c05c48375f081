"""Mini README: Storage backends for Moneyflow.

Exposes the key-value preference stores the ledger persists into. The file
store is used by the web interface and CLI; the memory store backs tests.
"""

from .preferences import JsonFilePreferenceStore, MemoryPreferenceStore, PreferenceStore

__all__ = ["JsonFilePreferenceStore", "MemoryPreferenceStore", "PreferenceStore"]
