"""
M3U Parser Service.
Parses playlist text into channel records and a derived category list.
"""
import re
import logging
import unicodedata
from typing import Iterable, Optional

from iptv_catalog.config import get_settings
from iptv_catalog.models.channel import (
    Category,
    Channel,
    ParsedPlaylist,
    UNCATEGORIZED,
    UNKNOWN_CHANNEL_NAME,
)

logger = logging.getLogger(__name__)

EXTINF_MARKER = '#EXTINF:'

# Attribute patterns for the EXTINF info line
TVG_ID_PATTERN = re.compile(r'tvg-id="([^"]*)"')
TVG_NAME_PATTERN = re.compile(r'tvg-name="([^"]*)"')
TVG_LOGO_PATTERN = re.compile(r'tvg-logo="([^"]*)"')
GROUP_TITLE_PATTERN = re.compile(r'group-title="([^"]*)"')

# Trailing display name: text after the first comma outside quoted attributes
TRAILING_NAME_PATTERN = re.compile(r'^[^,"]*(?:"[^"]*"[^,"]*)*,(.*)$')


def display_sort_key(name: str) -> tuple[str, str]:
    """
    Locale-aware sort key for display labels.
    
    Accents and case are ignored for the primary comparison; the raw
    name breaks ties so the order stays deterministic.
    """
    folded = unicodedata.normalize('NFKD', name)
    folded = ''.join(c for c in folded if not unicodedata.combining(c))
    return folded.casefold(), name


def sort_categories(labels: Iterable[str]) -> list[Category]:
    """Build a deduplicated, display-sorted category list from labels."""
    unique = dict.fromkeys(labels)
    return [
        Category(id=label, name=label)
        for label in sorted(unique, key=display_sort_key)
    ]


def _attribute(pattern: re.Pattern, info_line: str) -> str:
    match = pattern.search(info_line)
    return match.group(1) if match else ''


class M3UParser:
    """Parse M3U playlist text."""
    
    def __init__(self, default_logo_url: Optional[str] = None):
        self.default_logo_url = default_logo_url or get_settings().default_logo_url
    
    def parse(self, text: str) -> ParsedPlaylist:
        """
        Parse playlist text into channels and categories.
        
        Never raises on malformed input. An EXTINF line must be directly
        followed by its stream URL; when the next line is empty or is
        another tag, the entry is dropped and that next line is examined
        as a candidate entry of its own.
        
        Channels sharing an identity collapse to one: the last entry wins
        and keeps the list position of the first.
        
        Args:
            text: Raw playlist document
            
        Returns:
            Parsed channels in playlist order and sorted categories
        """
        lines = text.split('\n')
        channels: dict[str, Channel] = {}
        entries = 0
        
        i = 0
        while i < len(lines):
            line = lines[i].strip()
            if not line.startswith(EXTINF_MARKER):
                i += 1
                continue
            
            stream_url = lines[i + 1].strip() if i + 1 < len(lines) else ''
            if not stream_url or stream_url.startswith('#'):
                # No URL for this entry; re-examine the following line
                i += 1
                continue
            
            channel = self._build_channel(line, stream_url)
            channels[channel.id] = channel
            entries += 1
            i += 2
        
        parsed = list(channels.values())
        if entries != len(parsed):
            logger.debug(f"Collapsed {entries - len(parsed)} duplicate channel identities")
        
        categories = sort_categories(channel.category_id for channel in parsed)
        logger.info(f"Parsed {len(parsed)} channels in {len(categories)} categories")
        
        return ParsedPlaylist(channels=parsed, categories=categories)
    
    def _build_channel(self, info_line: str, stream_url: str) -> Channel:
        """Extract channel fields from an EXTINF line."""
        name = _attribute(TVG_NAME_PATTERN, info_line)
        if not name:
            match = TRAILING_NAME_PATTERN.match(info_line)
            name = match.group(1).strip() if match else ''
        
        return Channel(
            id=_attribute(TVG_ID_PATTERN, info_line) or stream_url,
            name=name or UNKNOWN_CHANNEL_NAME,
            logo_url=_attribute(TVG_LOGO_PATTERN, info_line) or self.default_logo_url,
            stream_url=stream_url,
            category_id=_attribute(GROUP_TITLE_PATTERN, info_line) or UNCATEGORIZED,
        )
