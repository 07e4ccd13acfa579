"""Key-value settings storage used to persist tip stats."""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

import aiosqlite


class SettingsStorage:
    """Async key-value store. Values must be JSON serializable."""

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(SettingsStorage):
    """In-process storage. Keeps deep copies so callers can't mutate stored values."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.set_calls = 0

    async def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self.data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self.set_calls += 1
        self.data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SqliteStorage(SettingsStorage):
    """Settings stored as JSON values in a single SQLite table."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._ready = False

    async def _ensure_schema(self, db: aiosqlite.Connection):
        if self._ready:
            return
        await db.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at REAL DEFAULT (julianday('now'))
            )
        """)
        await db.commit()
        self._ready = True

    def _connect(self):
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return aiosqlite.connect(self.db_path)

    async def get(self, key: str) -> Optional[Any]:
        async with self._connect() as db:
            await self._ensure_schema(db)
            async with db.execute("SELECT value FROM settings WHERE key = ?", (key,)) as cursor:
                row = await cursor.fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    async def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        async with self._connect() as db:
            await self._ensure_schema(db)
            await db.execute("""
                INSERT OR REPLACE INTO settings (key, value, updated_at)
                VALUES (?, ?, julianday('now'))
            """, (key, payload))
            await db.commit()

    async def delete(self, key: str) -> None:
        async with self._connect() as db:
            await self._ensure_schema(db)
            await db.execute("DELETE FROM settings WHERE key = ?", (key,))
            await db.commit()
