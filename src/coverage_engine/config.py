from __future__ import annotations

"""Simple settings loader with environment variables.

The ``get_settings`` function reads environment variables and caches the
resulting ``Settings`` object.  Tests may call ``reset_settings_cache`` to
force a reload when they modify environment variables at runtime.
"""

from dataclasses import dataclass
import os
from functools import lru_cache
from pathlib import Path

ACCOUNTS_FILE = "cleaned_assessment_account_data.json"
OUTBOUND_FILE = "cleaned_outbound_data.json"


@dataclass
class Settings:
    data_dir: str = "data"
    accounts_path: str | None = None
    outbound_path: str | None = None
    engine_spec_path: str | None = None
    log_level: str = "INFO"
    log_json: bool = False

    def resolved_accounts_path(self) -> Path:
        if self.accounts_path:
            return Path(self.accounts_path)
        return Path(self.data_dir) / ACCOUNTS_FILE

    def resolved_outbound_path(self) -> Path:
        if self.outbound_path:
            return Path(self.outbound_path)
        return Path(self.data_dir) / OUTBOUND_FILE


@lru_cache()
def get_settings() -> Settings:
    """Return settings loaded from environment variables."""

    data_dir = os.getenv("CE_DATA_DIR", "data")
    accounts_path = os.getenv("CE_ACCOUNTS_PATH")
    outbound_path = os.getenv("CE_OUTBOUND_PATH")
    engine_spec_path = os.getenv("CE_ENGINE_SPEC")
    log_level = os.getenv("CE_LOG_LEVEL", "INFO").upper()
    log_json = os.getenv("CE_LOG_JSON", "false").lower() == "true"
    return Settings(
        data_dir=data_dir,
        accounts_path=accounts_path,
        outbound_path=outbound_path,
        engine_spec_path=engine_spec_path,
        log_level=log_level,
        log_json=log_json,
    )


def reset_settings_cache() -> None:
    """Clear the settings cache (mainly for tests)."""

    get_settings.cache_clear()
