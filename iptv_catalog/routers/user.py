"""
User data API endpoints.
Handles source configuration, view state and favorites.
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from iptv_catalog.config import get_settings
from iptv_catalog.exceptions import ConfigValidationError
from iptv_catalog.services.app_state import get_app_state
from iptv_catalog.services.view import annotate_favorites

router = APIRouter(prefix="/api", tags=["user"])


class ConfigRequest(BaseModel):
    playlist_url: str
    guide_url: Optional[str] = None


class SearchRequest(BaseModel):
    query: str = ""


def state_summary(state) -> dict:
    return {
        "config": state.config,
        "is_loading": state.is_loading,
        "error": state.error,
        "channel_count": len(state.catalog.channels) if state.catalog else 0,
        "category_count": len(state.catalog.categories) if state.catalog else 0,
    }


# Configuration endpoints
@router.get("/config")
async def get_config():
    """Get configured sources and load status."""
    service = await get_app_state()
    return state_summary(service.state)


@router.get("/config/example")
async def get_example_config():
    """Get example source URLs."""
    settings = get_settings()
    return {
        "playlist_url": settings.example_playlist_url,
        "guide_url": settings.example_guide_url,
    }


@router.put("/config")
async def save_config(request: ConfigRequest):
    """Save sources and load the catalog."""
    service = await get_app_state()
    try:
        state = await service.save_config(request.playlist_url, request.guide_url)
    except ConfigValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    
    if state.error:
        raise HTTPException(status_code=502, detail=state.error)
    return state_summary(state)


@router.delete("/config")
async def clear_config():
    """Forget configured sources and the loaded catalog."""
    service = await get_app_state()
    state = await service.clear_config()
    return state_summary(state)


@router.post("/reload")
async def reload_catalog():
    """Reload the catalog from the stored sources."""
    service = await get_app_state()
    if not service.state.config.is_configured:
        raise HTTPException(status_code=409, detail="No playlist configured")
    
    state = await service.reload()
    if state.error:
        raise HTTPException(status_code=502, detail=state.error)
    return state_summary(state)


# View state endpoints
@router.get("/view")
async def get_view():
    """Get the current search query and category selection."""
    service = await get_app_state()
    return service.state.view


@router.put("/view/search")
async def set_search(request: SearchRequest):
    """Set the search query."""
    service = await get_app_state()
    return service.set_search(request.query).view


@router.post("/view/category/{category_id:path}/toggle")
async def toggle_category(category_id: str):
    """Select a category, or clear it if already selected."""
    service = await get_app_state()
    return service.toggle_category(category_id).view


# Favorites endpoints
@router.get("/user/favorites")
async def get_favorites():
    """Get favorite channel ids and the matching loaded channels."""
    service = await get_app_state()
    favorite_ids = service.state.view.favorite_ids
    catalog = service.state.catalog
    channels = [c for c in catalog.channels if c.id in favorite_ids] if catalog else []
    channels = annotate_favorites(channels, favorite_ids)
    
    return {
        "favorites": sorted(favorite_ids),
        "channels": channels,
        "count": len(favorite_ids)
    }


@router.post("/user/favorites/{channel_id:path}/toggle")
async def toggle_favorite(channel_id: str):
    """Add or remove a channel from favorites."""
    service = await get_app_state()
    favorite_ids = await service.toggle_favorite(channel_id)
    return {"channel_id": channel_id, "is_favorite": channel_id in favorite_ids}
