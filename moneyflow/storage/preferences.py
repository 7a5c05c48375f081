"""Mini README: Local key-value storage for Moneyflow state.

Structure:
    * PreferenceStore - abstract interface mirroring device preferences.
    * MemoryPreferenceStore - dictionary-backed store for tests and previews.
    * JsonFilePreferenceStore - JSON object on disk, rewritten atomically.

Values are plain strings; callers encode their own payloads (the ledger
stores a JSON array under ``"expenses"``). The file store rewrites the whole
object on each ``set`` by writing a sibling temp file and replacing the
target, so an interrupted write leaves the previous contents in place.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class PreferenceStore(ABC):
    """Base interface for string key-value storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None`` when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """Return the stored keys."""


class MemoryPreferenceStore(PreferenceStore):
    """Keep preferences in a dictionary for the lifetime of the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Preference values must be strings, got {type(value).__name__}")
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> Iterable[str]:
        return sorted(self._values.keys())


class JsonFilePreferenceStore(PreferenceStore):
    """Persist preferences as a JSON object in a single file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        LOGGER.debug("Preference store backed by %s", self.path)

    def _read_all(self) -> Dict[str, str]:
        """Read the whole file; a missing file is an empty store."""

        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as error:
            raise ValueError(f"Preferences file {self.path} is not valid JSON") from error
        if not isinstance(payload, dict):
            raise ValueError(f"Preferences file {self.path} must contain a JSON object")
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _write_all(self, values: Dict[str, str]) -> None:
        """Write ``values`` to a temp file beside the target, then replace it."""

        self.path.parent.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            prefix=f"{self.path.name}-",
            suffix=".tmp",
            dir=self.path.parent,
            delete=False,
        )
        try:
            with handle:
                json.dump(values, handle, indent=2, sort_keys=True)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(handle.name, self.path)
        except OSError:
            Path(handle.name).unlink(missing_ok=True)
            raise
        LOGGER.debug("Wrote %s preference keys to %s", len(values), self.path)

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Preference values must be strings, got {type(value).__name__}")
        try:
            values = self._read_all()
        except ValueError:
            LOGGER.warning("Discarding unreadable preferences file %s", self.path)
            values = {}
        values[key] = value
        self._write_all(values)

    def remove(self, key: str) -> None:
        values = self._read_all()
        if values.pop(key, None) is not None:
            self._write_all(values)

    def keys(self) -> Iterable[str]:
        return sorted(self._read_all().keys())
