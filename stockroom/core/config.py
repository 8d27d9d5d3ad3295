from __future__ import annotations

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./stockroom.db")
SQL_ECHO: bool = _env_flag("SQL_ECHO", "false")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Periodic box-stock snapshot refresh (see services/box_stock_scheduler.py).
BOX_STOCK_SYNC_ENABLED: bool = _env_flag("BOX_STOCK_SYNC_ENABLED", "true")
BOX_STOCK_SYNC_INTERVAL_MINUTES: int = int(os.getenv("BOX_STOCK_SYNC_INTERVAL_MINUTES", "15"))
