"""
Tests for key-value persistence of sources and favorites.
"""
import asyncio

import pytest

from iptv_catalog.config import Settings
from iptv_catalog.services import store as store_module
from iptv_catalog.services.store import KeyValueStore


class TestKeyValueStore:
    
    @pytest.mark.asyncio
    async def test_set_get_delete(self, kv_store):
        assert await kv_store.get("missing") is None
        
        await kv_store.set("key", {"a": [1, 2]})
        assert await kv_store.get("key") == {"a": [1, 2]}
        
        await kv_store.set("key", "replaced")
        assert await kv_store.get("key") == "replaced"
        
        await kv_store.delete("key", "missing")
        assert await kv_store.get("key") is None
    
    @pytest.mark.asyncio
    async def test_values_survive_reopen(self, tmp_path):
        db_path = str(tmp_path / "nested" / "store.db")
        store = KeyValueStore(db_path)
        await store.initialize()
        await store.set("iptv_favorites", ["a"])
        
        reopened = KeyValueStore(db_path)
        await reopened.initialize()
        assert await reopened.get("iptv_favorites") == ["a"]


class TestConfigStore:
    
    @pytest.mark.asyncio
    async def test_empty_store_is_unconfigured(self, config_store):
        config = await config_store.load()
        
        assert config.playlist_url is None
        assert config.guide_url is None
        assert not config.is_configured
    
    @pytest.mark.asyncio
    async def test_save_and_load(self, config_store):
        await config_store.save("http://e.com/p.m3u", "http://e.com/g.xml")
        
        config = await config_store.load()
        assert config.playlist_url == "http://e.com/p.m3u"
        assert config.guide_url == "http://e.com/g.xml"
        assert config.is_configured
    
    @pytest.mark.asyncio
    async def test_save_without_guide(self, config_store):
        await config_store.save("http://e.com/p.m3u")
        
        config = await config_store.load()
        assert config.guide_url is None
    
    @pytest.mark.asyncio
    async def test_clear(self, config_store):
        await config_store.save("http://e.com/p.m3u", "http://e.com/g.xml")
        await config_store.clear()
        
        assert not (await config_store.load()).is_configured


class TestFavoritesStore:
    
    @pytest.mark.asyncio
    async def test_round_trip(self, favorites_store):
        assert await favorites_store.load() == frozenset()
        
        await favorites_store.save(frozenset({"b", "a"}))
        assert await favorites_store.load() == frozenset({"a", "b"})
    
    @pytest.mark.asyncio
    async def test_corrupt_value_loads_empty(self, kv_store, favorites_store):
        await kv_store.set("iptv_favorites", {"not": "a list"})
        assert await favorites_store.load() == frozenset()


class TestGetStore:
    
    @pytest.mark.asyncio
    async def test_concurrent_callers_get_initialized_store(self, tmp_path, monkeypatch):
        settings = Settings(database_path=str(tmp_path / "singleton.db"))
        monkeypatch.setattr(store_module, "get_settings", lambda: settings)
        monkeypatch.setattr(store_module, "_store", None)
        
        async def read_after_get():
            store = await store_module.get_store()
            return await store.get("iptv_favorites")
        
        first, value = await asyncio.gather(store_module.get_store(), read_after_get())
        
        assert value is None
        assert await first.get("iptv_favorites") is None
        assert store_module._store is not None
