"""
View derivation.

Pure functions computing the displayed channel list from a catalog and
the current view state. Nothing here mutates its inputs.
"""
from typing import Optional

from iptv_catalog.models.channel import Catalog, Channel
from iptv_catalog.models.state import FAVORITES_CATEGORY_ID, ViewState


def annotate_favorites(channels: list[Channel], favorite_ids: frozenset[str]) -> list[Channel]:
    """Copy channels with is_favorite set from the favorites set."""
    return [
        channel.model_copy(update={'is_favorite': channel.id in favorite_ids})
        for channel in channels
    ]


def filter_by_search(channels: list[Channel], query: str) -> list[Channel]:
    """Keep channels whose name contains query, ignoring case."""
    if not query:
        return channels
    needle = query.lower()
    return [channel for channel in channels if needle in channel.name.lower()]


def filter_by_category(channels: list[Channel], category_id: Optional[str]) -> list[Channel]:
    """Apply the category selection (None keeps everything)."""
    if category_id is None:
        return channels
    if category_id == FAVORITES_CATEGORY_ID:
        return [channel for channel in channels if channel.is_favorite]
    return [channel for channel in channels if channel.category_id == category_id]


def search_view(catalog: Catalog, state: ViewState) -> list[Channel]:
    """Favorite-annotated channels matching the search query."""
    channels = annotate_favorites(catalog.channels, state.favorite_ids)
    return filter_by_search(channels, state.search_query)


def derive_view(catalog: Catalog, state: ViewState) -> list[Channel]:
    """
    Compute the channel list to display.
    
    Pipeline: annotate favorites, filter by search, filter by category.
    Result order is the catalog's playlist order.
    """
    return filter_by_category(search_view(catalog, state), state.selected_category_id)


def toggle_category(state: ViewState, category_id: Optional[str]) -> ViewState:
    """Select a category, or clear the selection if it is already selected."""
    if category_id is None or state.selected_category_id == category_id:
        return state.model_copy(update={'selected_category_id': None})
    return state.model_copy(update={'selected_category_id': category_id})


def set_search(state: ViewState, query: str) -> ViewState:
    return state.model_copy(update={'search_query': query})


def toggle_favorite(favorite_ids: frozenset[str], channel_id: str) -> frozenset[str]:
    """Return the favorites set with channel_id added or removed."""
    if channel_id in favorite_ids:
        return favorite_ids - {channel_id}
    return favorite_ids | {channel_id}
