"""
Application state service.

Holds the process-wide AppState snapshot. Every change is a named
transition producing a new snapshot; readers never see a partial update.
Loads are tagged with a generation so a result arriving after a newer
load was started is discarded.
"""
import logging
from typing import Optional

from iptv_catalog.exceptions import CatalogError
from iptv_catalog.models.channel import Catalog, Channel
from iptv_catalog.models.state import FAVORITES_CATEGORY_ID, AppState, SourceConfig
from iptv_catalog.services.loader import CatalogLoader, describe_load_failure, validate_sources
from iptv_catalog.services.store import ConfigStore, FavoritesStore, get_store
from iptv_catalog.services import view

logger = logging.getLogger(__name__)


# State transitions

def load_started(state: AppState, config: SourceConfig) -> AppState:
    return state.model_copy(update={
        'config': config,
        'is_loading': True,
        'error': None,
        'generation': state.generation + 1,
    })


def load_succeeded(state: AppState, generation: int, catalog: Catalog) -> AppState:
    if generation != state.generation:
        return state
    selected = state.view.selected_category_id
    view_state = state.view
    if selected not in (None, FAVORITES_CATEGORY_ID) and not catalog.has_category(selected):
        view_state = view.toggle_category(view_state, None)
    return state.model_copy(update={
        'catalog': catalog,
        'view': view_state,
        'is_loading': False,
        'error': None,
    })


def load_failed(state: AppState, generation: int, message: str) -> AppState:
    if generation != state.generation:
        return state
    return state.model_copy(update={
        'config': SourceConfig(),
        'catalog': None,
        'is_loading': False,
        'error': message,
    })


def config_cleared(state: AppState) -> AppState:
    # Bumping the generation invalidates any load still in flight
    return state.model_copy(update={
        'config': SourceConfig(),
        'catalog': None,
        'is_loading': False,
        'error': None,
        'generation': state.generation + 1,
    })


def favorites_loaded(state: AppState, favorite_ids: frozenset[str]) -> AppState:
    return state.model_copy(update={
        'view': state.view.model_copy(update={'favorite_ids': favorite_ids}),
    })


def favorite_toggled(state: AppState, channel_id: str) -> AppState:
    favorite_ids = view.toggle_favorite(state.view.favorite_ids, channel_id)
    return favorites_loaded(state, favorite_ids)


def search_changed(state: AppState, query: str) -> AppState:
    return state.model_copy(update={'view': view.set_search(state.view, query)})


def category_toggled(state: AppState, category_id: Optional[str]) -> AppState:
    return state.model_copy(update={'view': view.toggle_category(state.view, category_id)})


class AppStateService:
    """Coordinates stores, loading and view state."""
    
    def __init__(
        self,
        config_store: ConfigStore,
        favorites_store: FavoritesStore,
        loader: Optional[CatalogLoader] = None,
    ):
        self.config_store = config_store
        self.favorites_store = favorites_store
        self.loader = loader or CatalogLoader()
        self.state = AppState()
    
    async def initialize(self) -> AppState:
        """Restore favorites and sources, then load if configured."""
        self.state = favorites_loaded(self.state, await self.favorites_store.load())
        config = await self.config_store.load()
        if config.is_configured:
            return await self.load(config)
        logger.info("No playlist configured, waiting for configuration")
        return self.state
    
    async def load(self, config: SourceConfig) -> AppState:
        """
        Run one load cycle for config.
        
        A fatal failure clears the stored configuration and leaves the
        message on state.error. Results of superseded loads are dropped.
        """
        self.state = load_started(self.state, config)
        generation = self.state.generation
        
        try:
            catalog = await self.loader.load(config)
        except CatalogError as e:
            if generation != self.state.generation:
                logger.info(f"Dropping failure of superseded load #{generation}")
                return self.state
            logger.error(f"Failed to load data: {e}")
            await self.config_store.clear()
            self.state = load_failed(self.state, generation, describe_load_failure(e))
            return self.state
        
        if generation != self.state.generation:
            logger.info(f"Dropping result of superseded load #{generation}")
            return self.state
        
        self.state = load_succeeded(self.state, generation, catalog)
        return self.state
    
    async def reload(self) -> AppState:
        """Reload using the stored configuration."""
        return await self.load(await self.config_store.load())
    
    async def save_config(self, playlist_url: str, guide_url: Optional[str] = None) -> AppState:
        """
        Validate, persist and load new sources.
        
        Raises:
            ConfigValidationError: If the URLs are invalid
        """
        config = validate_sources(playlist_url, guide_url)
        await self.config_store.save(config.playlist_url, config.guide_url)
        return await self.load(config)
    
    async def clear_config(self) -> AppState:
        await self.config_store.clear()
        self.state = config_cleared(self.state)
        return self.state
    
    async def toggle_favorite(self, channel_id: str) -> frozenset[str]:
        """Toggle a favorite; memory reflects it before the store write."""
        self.state = favorite_toggled(self.state, channel_id)
        favorite_ids = self.state.view.favorite_ids
        await self.favorites_store.save(favorite_ids)
        return favorite_ids
    
    def set_search(self, query: str) -> AppState:
        self.state = search_changed(self.state, query)
        return self.state
    
    def toggle_category(self, category_id: Optional[str]) -> AppState:
        self.state = category_toggled(self.state, category_id)
        return self.state
    
    def channels(self) -> list[Channel]:
        """Derived channel view for the current state."""
        if self.state.catalog is None:
            return []
        return view.derive_view(self.state.catalog, self.state.view)


# Singleton
_app_state_service: Optional[AppStateService] = None


async def get_app_state() -> AppStateService:
    """Get or create the application state singleton."""
    global _app_state_service
    if _app_state_service is None:
        store = await get_store()
        _app_state_service = AppStateService(ConfigStore(store), FavoritesStore(store))
    return _app_state_service
