"""SQLite-backed key-value store for the order list and name preferences.

Each key holds one JSON document. Writes replace the whole value (last write
wins) and there is no schema versioning: a value that does not parse into the
expected shape is logged and treated as missing.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

from momo_order.config import DB_PATH
from momo_order.constant import STORAGE_KEY_NAME_CONFIGS, STORAGE_KEY_ORDERS
from momo_order.models import NameConfig, Order

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _connect() -> sqlite3.Connection:
    db_file = Path(DB_PATH)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_file)


def bootstrap_schema() -> None:
    """Create the key-value table if it does not already exist."""
    with _connect() as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )


def read_value(key: str) -> str | None:
    """Return the raw stored text for a key, or None when absent."""
    with _connect() as conn:
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    if row is None:
        return None
    return str(row[0])


def write_value(key: str, value: str) -> None:
    """Insert or replace the stored text for a key."""
    with _connect() as conn:
        conn.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )


def _load_list(key: str, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    try:
        raw = read_value(key)
        if raw is None:
            return []
        decoded = json.loads(raw)
        if not isinstance(decoded, list):
            raise TypeError(f"expected a JSON list, got {type(decoded).__name__}")
        return [parse(item) for item in decoded]
    except (sqlite3.Error, OSError, ValueError, TypeError, KeyError) as exc:
        logger.warning("load_failed key=%s error=%r", key, exc)
        return []


def _save_list(key: str, items: Iterable[Any]) -> None:
    try:
        write_value(key, json.dumps([item.to_dict() for item in items]))
    except (sqlite3.Error, OSError):
        logger.exception("save_failed key=%s", key)


def load_orders() -> list[Order]:
    """Restore the saved order list; anything unreadable yields []."""
    return _load_list(STORAGE_KEY_ORDERS, Order.from_dict)


def save_orders(orders: Iterable[Order]) -> None:
    """Persist the full order list. Failures are logged, never raised."""
    _save_list(STORAGE_KEY_ORDERS, orders)


def load_name_configs() -> list[NameConfig]:
    return _load_list(STORAGE_KEY_NAME_CONFIGS, NameConfig.from_dict)


def save_name_configs(configs: Iterable[NameConfig]) -> None:
    _save_list(STORAGE_KEY_NAME_CONFIGS, configs)


def has_value(key: str) -> bool:
    try:
        return read_value(key) is not None
    except (sqlite3.Error, OSError) as exc:
        logger.warning("read_failed key=%s error=%r", key, exc)
        return False
