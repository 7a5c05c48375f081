"""Mini README: Centralised configuration for Moneyflow.

Structure:
    * CategoryFlow - which category editing flow the form offers.
    * MoneyflowSettings - Pydantic settings read from ``MONEYFLOW_*`` variables.
    * get_settings - cached accessor used by the CLI and the web factory.

Usage:
    ``get_settings().preferences_path`` locates the local key-value file that
    holds the persisted ledger. Tests build ``MoneyflowSettings`` directly with
    a temporary ``data_directory`` instead of touching the cached instance.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class CategoryFlow(str, Enum):
    """Category editing flows reachable from the sentinel option."""

    MODAL = "modal"
    INLINE = "inline"


class MoneyflowSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    environment: str = Field(
        "development",
        description="Environment label controlling reload behaviour and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the local preferences file.",
    )
    preferences_file: str = Field(
        "preferences.json",
        description="File name of the key-value store inside the data directory.",
    )
    expenses_key: str = Field(
        "expenses",
        description="Key under which the serialised ledger is stored.",
    )
    category_flow: CategoryFlow = Field(
        CategoryFlow.MODAL,
        description=(
            "'modal' opens a separate management screen from 'Manage Categories';"
            " 'inline' shows a text entry inside the form from 'Add New Category'."
        ),
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web form to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web form listens on.",
        ge=1,
        le=65535,
    )
    log_level: str = Field("INFO", description="Root logging level.")

    class Config:
        env_prefix = "MONEYFLOW_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: str | Path) -> Path:
        """Expand user directories and make sure the directory exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def preferences_path(self) -> Path:
        """Full path of the preferences file."""

        return self.data_directory / self.preferences_file


@lru_cache()
def get_settings() -> MoneyflowSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return MoneyflowSettings()
