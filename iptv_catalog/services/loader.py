"""
Catalog Loader Service.
Fetches and parses playlist and guide sources into a catalog.
"""
import logging
from typing import Optional
from urllib.parse import urlparse

from iptv_catalog.exceptions import (
    CatalogError,
    ConfigValidationError,
    EmptyPlaylistError,
    FetchError,
    GuideParseError,
)
from iptv_catalog.models.channel import Catalog
from iptv_catalog.models.state import SourceConfig
from iptv_catalog.services.catalog_builder import build_catalog
from iptv_catalog.services.epg_parser import EPGParser, GuideMap
from iptv_catalog.services.fetcher import Fetcher
from iptv_catalog.services.m3u_parser import M3UParser

logger = logging.getLogger(__name__)


def _is_absolute_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError for a non-numeric port
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def validate_sources(playlist_url: Optional[str], guide_url: Optional[str] = None) -> SourceConfig:
    """
    Validate user-entered source URLs.
    
    The playlist URL is required; the guide URL is optional and an empty
    value means no guide.
    
    Raises:
        ConfigValidationError: If a URL is missing or malformed
    """
    playlist_url = (playlist_url or '').strip()
    guide_url = (guide_url or '').strip()
    
    if not playlist_url:
        raise ConfigValidationError("M3U Playlist URL is required.")
    if not _is_absolute_url(playlist_url) or (guide_url and not _is_absolute_url(guide_url)):
        raise ConfigValidationError("Please enter valid URLs.")
    
    return SourceConfig(playlist_url=playlist_url, guide_url=guide_url or None)


def describe_load_failure(error: CatalogError) -> str:
    """Human-readable message for a failed load."""
    return f"Failed to load data: {error}. Please check your URLs."


class CatalogLoader:
    """Sequence playlist and guide loading for one load cycle."""
    
    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        playlist_parser: Optional[M3UParser] = None,
        guide_parser: Optional[EPGParser] = None,
    ):
        self.fetcher = fetcher or Fetcher()
        self.playlist_parser = playlist_parser or M3UParser()
        self.guide_parser = guide_parser or EPGParser()
    
    async def load(self, config: SourceConfig) -> Catalog:
        """
        Load a catalog from configured sources.
        
        The guide is only fetched once the playlist has loaded; guide
        failures are absorbed and leave every channel without programs.
        
        Raises:
            FetchError: If the playlist cannot be fetched
            EmptyPlaylistError: If the playlist yields no channels
        """
        if not config.playlist_url:
            raise EmptyPlaylistError("No M3U playlist URL configured.")
        
        text = await self.fetcher.fetch_text(config.playlist_url)
        playlist = self.playlist_parser.parse(text)
        if not playlist.channels:
            raise EmptyPlaylistError()
        
        guide = await self.load_guide(config.guide_url) if config.guide_url else None
        
        catalog = build_catalog(playlist, guide)
        logger.info(
            f"Catalog built: {len(catalog.channels)} channels, "
            f"{len(catalog.categories)} categories, guide={'yes' if guide else 'no'}"
        )
        return catalog
    
    async def load_guide(self, url: str) -> Optional[GuideMap]:
        """Fetch and parse guide data, or None if unavailable."""
        try:
            text = await self.fetcher.fetch_text(url)
            return self.guide_parser.parse(text)
        except (FetchError, GuideParseError) as e:
            logger.warning(f"Guide unavailable, continuing without programs: {e}")
            return None
