"""
Catalog Builder Service.
Merges parsed playlist channels with guide data.
"""
from typing import Optional

from iptv_catalog.models.channel import Catalog, ParsedPlaylist
from iptv_catalog.services.epg_parser import GuideMap


def build_catalog(playlist: ParsedPlaylist, guide: Optional[GuideMap] = None) -> Catalog:
    """
    Attach guide programs to each channel by identity.
    
    Channels without guide data, or every channel when no guide is
    available, get an empty program list.
    """
    guide = guide or {}
    channels = [
        channel.model_copy(update={'programs': list(guide.get(channel.id, []))})
        for channel in playlist.channels
    ]
    return Catalog(channels=channels, categories=list(playlist.categories))
