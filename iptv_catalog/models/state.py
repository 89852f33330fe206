"""
Source configuration and user view state models.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from iptv_catalog.models.channel import Catalog


# Pseudo category selecting only favorited channels
FAVORITES_CATEGORY_ID = "__FAVORITES__"


class SourceConfig(BaseModel):
    """Playlist and guide URLs as stored by the config store."""
    playlist_url: Optional[str] = None
    guide_url: Optional[str] = None
    
    @property
    def is_configured(self) -> bool:
        return bool(self.playlist_url)


class ViewState(BaseModel):
    """
    User interaction state driving view derivation.
    
    selected_category_id is None for "all channels", FAVORITES_CATEGORY_ID
    for favorites only, or a concrete category id.
    """
    model_config = ConfigDict(frozen=True)
    
    search_query: str = ""
    selected_category_id: Optional[str] = None
    favorite_ids: frozenset[str] = Field(default_factory=frozenset)


class AppState(BaseModel):
    """Process-wide state snapshot, replaced wholesale on every transition."""
    model_config = ConfigDict(frozen=True)
    
    config: SourceConfig = Field(default_factory=SourceConfig)
    catalog: Optional[Catalog] = None
    view: ViewState = Field(default_factory=ViewState)
    is_loading: bool = False
    error: Optional[str] = None
    generation: int = 0
