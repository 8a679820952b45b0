"""Runtime configuration.

Values come from ``SPENDLOG_*`` environment variables; CLI options override
them. The resulting ``Settings`` picks the store implementation at process
start.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

STORE_SQLITE = "sqlite"
STORE_MEMORY = "memory"
STORES = (STORE_SQLITE, STORE_MEMORY)

DEFAULT_RATES_URL = "https://api.exchangerate.host/latest"
DEFAULT_RATES_TIMEOUT = 5.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001
DEFAULT_CURRENCY = "CNY"


def default_database_path() -> str:
    """Return ~/.spendlog/spendlog.db, creating the directory if needed."""
    db_dir = Path.home() / ".spendlog"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "spendlog.db")


@dataclass(frozen=True)
class Settings:
    """Process-wide settings.

    ``currency`` tags records added from the command line when no currency
    is given.
    """

    store: str = STORE_SQLITE
    database_path: Optional[str] = None
    rates_url: str = DEFAULT_RATES_URL
    rates_timeout: float = DEFAULT_RATES_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    currency: str = DEFAULT_CURRENCY

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: If a variable holds a value of the wrong kind
        """
        env = os.environ if environ is None else environ

        store = env.get("SPENDLOG_STORE", STORE_SQLITE).strip().lower()
        if store not in STORES:
            raise ValueError(f"SPENDLOG_STORE must be one of {', '.join(STORES)}, got '{store}'")

        try:
            rates_timeout = float(env.get("SPENDLOG_RATES_TIMEOUT", DEFAULT_RATES_TIMEOUT))
            port = int(env.get("SPENDLOG_PORT", DEFAULT_PORT))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e

        return cls(
            store=store,
            database_path=env.get("SPENDLOG_DB_PATH") or None,
            rates_url=env.get("SPENDLOG_RATES_URL", DEFAULT_RATES_URL),
            rates_timeout=rates_timeout,
            host=env.get("SPENDLOG_HOST", DEFAULT_HOST),
            port=port,
            currency=env.get("SPENDLOG_CURRENCY", "").strip().upper() or DEFAULT_CURRENCY,
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
