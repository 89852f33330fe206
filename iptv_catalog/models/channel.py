"""
Channel, Category and Catalog data models.
Built from M3U playlists, enriched with XMLTV guide data.
"""
from pydantic import BaseModel, Field

from iptv_catalog.models.epg import Program


UNKNOWN_CHANNEL_NAME = "Unknown Channel"
UNCATEGORIZED = "Uncategorized"


class Channel(BaseModel):
    """Playable channel parsed from a playlist entry."""
    id: str  # tvg-id, or the stream URL when the entry has none
    name: str
    logo_url: str
    stream_url: str
    category_id: str
    programs: list[Program] = Field(default_factory=list)
    
    # Derived from the favorites set at view time, never persisted
    is_favorite: bool = False


class Category(BaseModel):
    """Channel category derived from group-title labels."""
    id: str
    name: str


class ParsedPlaylist(BaseModel):
    """Result of a single playlist parse."""
    channels: list[Channel] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)


class Catalog(BaseModel):
    """Snapshot of channels and categories produced by one load cycle."""
    channels: list[Channel] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    
    def get_channel(self, channel_id: str) -> Channel | None:
        """Look up a channel by identity."""
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None
    
    def has_category(self, category_id: str) -> bool:
        return any(category.id == category_id for category in self.categories)


class ChannelListResponse(BaseModel):
    """Derived channel view response."""
    channels: list[Channel]
    total: int
    search: str
    category: str | None
