"""
Channel catalog API endpoints.
"""
from fastapi import APIRouter, Query, HTTPException
from typing import Optional

from iptv_catalog.models.channel import ChannelListResponse
from iptv_catalog.services.app_state import AppStateService, get_app_state
from iptv_catalog.services.view import derive_view

router = APIRouter(prefix="/api", tags=["channels"])


def require_catalog(service: AppStateService):
    """Return the current catalog or fail with 409/502."""
    state = service.state
    if state.catalog is not None:
        return state.catalog
    if state.error:
        raise HTTPException(status_code=502, detail=state.error)
    raise HTTPException(status_code=409, detail="No playlist loaded. Configure sources first.")


@router.get("/channels", response_model=ChannelListResponse)
async def list_channels(
    search: Optional[str] = Query(None, description="Override the stored search query"),
    category: Optional[str] = Query(None, description="Override the stored category selection"),
):
    """
    List channels for the current view state.
    
    - **search**: case-insensitive substring of the channel name
    - **category**: category id, or `__FAVORITES__` for favorites only
    
    Overrides apply to this request only; use the /api/view endpoints to
    change the stored view state.
    """
    service = await get_app_state()
    catalog = require_catalog(service)
    
    view_state = service.state.view
    if search is not None:
        view_state = view_state.model_copy(update={'search_query': search})
    if category is not None:
        view_state = view_state.model_copy(update={'selected_category_id': category or None})
    
    channels = derive_view(catalog, view_state)
    return ChannelListResponse(
        channels=channels,
        total=len(channels),
        search=view_state.search_query,
        category=view_state.selected_category_id,
    )


@router.get("/channels/{channel_id:path}")
async def get_channel(channel_id: str):
    """Get a single channel with its programs."""
    service = await get_app_state()
    catalog = require_catalog(service)
    
    channel = catalog.get_channel(channel_id)
    if not channel:
        raise HTTPException(status_code=404, detail="Channel not found")
    
    return channel.model_copy(
        update={'is_favorite': channel.id in service.state.view.favorite_ids}
    )


@router.get("/categories")
async def list_categories():
    """List categories sorted by display name."""
    service = await get_app_state()
    catalog = require_catalog(service)
    return {
        "categories": catalog.categories,
        "selected": service.state.view.selected_category_id,
        "has_favorites": bool(service.state.view.favorite_ids),
    }
