"""
EPG Parser Service.
Parses XMLTV guide data into per-channel program lists.
"""
import xml.etree.ElementTree as ET
import logging
from collections import defaultdict
from typing import Optional

from iptv_catalog.exceptions import GuideParseError
from iptv_catalog.models.epg import Program, TIME_NOT_AVAILABLE

logger = logging.getLogger(__name__)

GuideMap = dict[str, list[Program]]


def format_guide_time(timestamp: str) -> str:
    """
    Format an XMLTV timestamp as HH:MM.
    
    Format: 20251212040000 +0000. Hour and minute are read at fixed
    offsets; no timezone conversion is applied. Anything shorter than
    12 characters yields N/A.
    """
    if len(timestamp) < 12:
        return TIME_NOT_AVAILABLE
    return f"{timestamp[8:10]}:{timestamp[10:12]}"


def _element_text(element: Optional[ET.Element]) -> str:
    if element is None:
        return ''
    return ''.join(element.itertext())


class EPGParser:
    """Parse XMLTV format EPG data."""
    
    def parse(self, text: str) -> GuideMap:
        """
        Parse an XMLTV document into programs keyed by channel id.
        
        Programmes missing channel, start, stop or title are skipped.
        Each channel's programs are ordered by formatted start time
        (string comparison, so a list crossing midnight is not reordered
        by date).
        
        Raises:
            GuideParseError: If the document is not well-formed XML
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise GuideParseError(f"Invalid XMLTV document: {e}") from e
        
        guide: defaultdict[str, list[Program]] = defaultdict(list)
        skipped = 0
        
        for programme in root.iter('programme'):
            channel_id = programme.get('channel')
            start = programme.get('start')
            stop = programme.get('stop')
            title = _element_text(programme.find('title'))
            
            if not all([channel_id, start, stop, title]):
                skipped += 1
                continue
            
            guide[channel_id].append(Program(
                title=title,
                description=_element_text(programme.find('desc')),
                start_time=format_guide_time(start),
                end_time=format_guide_time(stop),
                start=start,
                stop=stop,
            ))
        
        for programs in guide.values():
            programs.sort(key=lambda p: p.start_time)
        
        total = sum(len(programs) for programs in guide.values())
        logger.info(
            f"Parsed {total} programs for {len(guide)} channels ({skipped} skipped)"
        )
        
        return dict(guide)
