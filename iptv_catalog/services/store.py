"""
SQLite-backed key-value persistence.
Stores source URLs and the favorites set.
"""
import aiosqlite
import json
import logging
from pathlib import Path
from typing import Any, Optional

from iptv_catalog.config import get_settings
from iptv_catalog.models.state import SourceConfig

logger = logging.getLogger(__name__)

PLAYLIST_URL_KEY = "iptv_m3u_url"
GUIDE_URL_KEY = "iptv_epg_url"
FAVORITES_KEY = "iptv_favorites"


class KeyValueStore:
    """Async SQLite key-value store with JSON-encoded values."""
    
    def __init__(self, db_path: Optional[str] = None):
        settings = get_settings()
        self.db_path = db_path or settings.database_path
        self._ensure_directory()
    
    def _ensure_directory(self):
        """Create data directory if it doesn't exist."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
    
    async def initialize(self):
        """Create the storage table if it doesn't exist."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            await db.commit()
    
    async def get(self, key: str) -> Optional[Any]:
        """Get stored value, or None if absent."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = await cursor.fetchone()
            if row:
                return json.loads(row[0])
            return None
    
    async def set(self, key: str, value: Any):
        """Store a value, replacing any previous one."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """INSERT OR REPLACE INTO kv (key, value, updated_at)
                   VALUES (?, ?, CURRENT_TIMESTAMP)""",
                (key, json.dumps(value))
            )
            await db.commit()
    
    async def delete(self, *keys: str):
        """Remove keys if present."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.executemany("DELETE FROM kv WHERE key = ?", [(key,) for key in keys])
            await db.commit()


class ConfigStore:
    """Persisted playlist and guide URLs."""
    
    def __init__(self, store: KeyValueStore):
        self.store = store
    
    async def load(self) -> SourceConfig:
        return SourceConfig(
            playlist_url=await self.store.get(PLAYLIST_URL_KEY) or None,
            guide_url=await self.store.get(GUIDE_URL_KEY) or None,
        )
    
    async def save(self, playlist_url: str, guide_url: Optional[str] = None):
        await self.store.set(PLAYLIST_URL_KEY, playlist_url)
        await self.store.set(GUIDE_URL_KEY, guide_url or "")
    
    async def clear(self):
        logger.info("Clearing stored source configuration")
        await self.store.delete(PLAYLIST_URL_KEY, GUIDE_URL_KEY)


class FavoritesStore:
    """Persisted set of favorite channel ids."""
    
    def __init__(self, store: KeyValueStore):
        self.store = store
    
    async def load(self) -> frozenset[str]:
        saved = await self.store.get(FAVORITES_KEY)
        if not isinstance(saved, list):
            return frozenset()
        return frozenset(str(channel_id) for channel_id in saved)
    
    async def save(self, favorite_ids: frozenset[str]):
        await self.store.set(FAVORITES_KEY, sorted(favorite_ids))


# Singleton instance
_store: Optional[KeyValueStore] = None


async def get_store() -> KeyValueStore:
    """Get or create key-value store singleton."""
    global _store
    if _store is None:
        store = KeyValueStore()
        await store.initialize()
        _store = store
    return _store
