"""
Pytest configuration and fixtures for IPTV catalog tests.
"""
import httpx
import pytest
import pytest_asyncio

from iptv_catalog.services.fetcher import Fetcher
from iptv_catalog.services.store import ConfigStore, FavoritesStore, KeyValueStore


PLAYLIST_URL = "http://example.com/playlist.m3u"
GUIDE_URL = "http://example.com/guide.xml"


@pytest.fixture
def sample_m3u_content():
    """Sample M3U content for testing."""
    return """#EXTM3U
#EXTINF:-1 tvg-id="ABC.us" tvg-logo="https://example.com/abc.png" group-title="News",ABC East
http://example.com/abc-east.m3u8
#EXTINF:-1 tvg-id="CNN.us" group-title="News",CNN (1080p)
http://example.com/cnn.m3u8
#EXTINF:-1 tvg-id="ESPN.us" group-title="Sports",ESPN
http://example.com/espn.m3u8
#EXTINF:-1,Channel Without ID
http://example.com/no-id.m3u8
"""


@pytest.fixture
def sample_epg_xml():
    """Sample XMLTV EPG content for testing."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<tv>
    <channel id="ABC.us">
        <display-name>ABC</display-name>
    </channel>
    <programme start="20251212020000 +0000" stop="20251212030000 +0000" channel="ABC.us">
        <title>Weather Update</title>
    </programme>
    <programme start="20251212010000 +0000" stop="20251212020000 +0000" channel="ABC.us">
        <title>Morning News</title>
        <desc>Daily news broadcast</desc>
    </programme>
    <programme start="20251212180000 +0000" stop="20251212190000 +0000" channel="ESPN.us">
        <title>SportsCenter</title>
    </programme>
</tv>
"""


class MockSources:
    """Serves canned responses per URL through an httpx mock transport."""
    
    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.requested = []
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        if url not in self.responses:
            return httpx.Response(404, text="Not Found")
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        status, body = response
        return httpx.Response(status, text=body)
    
    def fetcher(self) -> Fetcher:
        return Fetcher(timeout=5.0, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def mock_sources(sample_m3u_content, sample_epg_xml):
    """Playlist and guide both served successfully."""
    return MockSources({
        PLAYLIST_URL: (200, sample_m3u_content),
        GUIDE_URL: (200, sample_epg_xml),
    })


@pytest_asyncio.fixture
async def kv_store(tmp_path):
    """Initialized key-value store in a temporary database."""
    store = KeyValueStore(str(tmp_path / "test_store.db"))
    await store.initialize()
    return store


@pytest.fixture
def config_store(kv_store):
    return ConfigStore(kv_store)


@pytest.fixture
def favorites_store(kv_store):
    return FavoritesStore(kv_store)
