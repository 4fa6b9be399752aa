from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from eunoia.data.errors import StoreError
from eunoia.db.database import get_conn

class PrefsRepo:
    """Namespaced key/value store; values are kept as JSON text."""

    def __init__(self, db_path: Path):
        self.db_path = db_path

    def get_json(self, namespace: str, key: str) -> Optional[Any]:
        try:
            with get_conn(self.db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM preferences WHERE namespace = ? AND key = ?",
                    (namespace, key),
                ).fetchone()
            if not row:
                return None
            return json.loads(row["value"])
        except (sqlite3.Error, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read {namespace}/{key}: {e}") from e

    def put_json(self, namespace: str, key: str, value: Any) -> None:
        now = datetime.now(timezone.utc).isoformat()
        try:
            payload = json.dumps(value, ensure_ascii=False)
            with get_conn(self.db_path) as conn:
                conn.execute(
                    """INSERT INTO preferences (namespace, key, value, updated_at)
                         VALUES (?, ?, ?, ?)
                         ON CONFLICT(namespace, key)
                         DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at""",
                    (namespace, key, payload, now),
                )
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise StoreError(f"Cannot write {namespace}/{key}: {e}") from e

    def delete(self, namespace: str, key: str) -> None:
        try:
            with get_conn(self.db_path) as conn:
                conn.execute("DELETE FROM preferences WHERE namespace = ? AND key = ?", (namespace, key))
        except sqlite3.Error as e:
            raise StoreError(f"Cannot delete {namespace}/{key}: {e}") from e
