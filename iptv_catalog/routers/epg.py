"""
EPG (Electronic Program Guide) API endpoints.
"""
from fastapi import APIRouter, HTTPException

from iptv_catalog.routers.channels import require_catalog
from iptv_catalog.services.app_state import get_app_state

router = APIRouter(prefix="/api/epg", tags=["epg"])


@router.get("/channel/{channel_id:path}")
async def get_channel_epg(channel_id: str):
    """
    Get guide programs for a specific channel.
    
    Channels without guide data return an empty list.
    """
    service = await get_app_state()
    catalog = require_catalog(service)
    
    channel = catalog.get_channel(channel_id)
    if not channel:
        raise HTTPException(status_code=404, detail="Channel not found")
    
    return {
        "channel_id": channel.id,
        "programs": channel.programs,
        "count": len(channel.programs)
    }


@router.get("/stats")
async def get_epg_stats():
    """Get guide coverage for the loaded catalog."""
    service = await get_app_state()
    catalog = require_catalog(service)
    
    with_guide = [channel for channel in catalog.channels if channel.programs]
    return {
        "channels": len(catalog.channels),
        "channels_with_programs": len(with_guide),
        "programs": sum(len(channel.programs) for channel in with_guide),
    }
