"""
Tests for view derivation.
"""
import pytest

from iptv_catalog.models.state import FAVORITES_CATEGORY_ID, ViewState
from iptv_catalog.services.catalog_builder import build_catalog
from iptv_catalog.services.m3u_parser import M3UParser
from iptv_catalog.services.view import (
    derive_view,
    search_view,
    set_search,
    toggle_category,
    toggle_favorite,
)


@pytest.fixture
def catalog(sample_m3u_content):
    return build_catalog(M3UParser().parse(sample_m3u_content))


def names(channels):
    return [c.name for c in channels]


class TestDeriveView:
    
    def test_default_state_keeps_catalog_order(self, catalog):
        channels = derive_view(catalog, ViewState())
        
        assert [c.id for c in channels] == [c.id for c in catalog.channels]
        assert not any(c.is_favorite for c in channels)
    
    def test_favorites_are_annotated(self, catalog):
        state = ViewState(favorite_ids=frozenset({'CNN.us'}))
        
        channels = derive_view(catalog, state)
        
        flags = {c.id: c.is_favorite for c in channels}
        assert flags['CNN.us'] is True
        assert flags['ABC.us'] is False
        # Catalog channels are left untouched
        assert not any(c.is_favorite for c in catalog.channels)
    
    def test_search_is_case_insensitive_substring(self, catalog):
        state = ViewState(search_query='cnN')
        assert names(derive_view(catalog, state)) == ['CNN (1080p)']
    
    def test_search_without_match_is_empty(self, catalog):
        assert derive_view(catalog, ViewState(search_query='nothing here')) == []
    
    def test_category_filter(self, catalog):
        state = ViewState(selected_category_id='News')
        assert names(derive_view(catalog, state)) == ['ABC East', 'CNN (1080p)']
    
    def test_unknown_category_is_empty(self, catalog):
        assert derive_view(catalog, ViewState(selected_category_id='Movies')) == []
    
    def test_favorites_filter(self, catalog):
        state = ViewState(
            selected_category_id=FAVORITES_CATEGORY_ID,
            favorite_ids=frozenset({'ESPN.us', 'ABC.us', 'not-in-catalog'}),
        )
        
        channels = derive_view(catalog, state)
        
        assert names(channels) == ['ABC East', 'ESPN']
        assert all(c.is_favorite for c in channels)
    
    def test_search_and_category_combine(self, catalog):
        state = ViewState(search_query='e', selected_category_id='News')
        assert names(derive_view(catalog, state)) == ['ABC East']
    
    def test_derive_is_idempotent(self, catalog):
        state = ViewState(search_query='n', favorite_ids=frozenset({'CNN.us'}))
        assert derive_view(catalog, state) == derive_view(catalog, state)
    
    def test_search_view_ignores_category(self, catalog):
        state = ViewState(search_query='e', selected_category_id='News')
        assert names(search_view(catalog, state)) == ['ABC East', 'ESPN', 'Channel Without ID']


class TestStateUpdates:
    
    def test_toggle_category_twice_returns_to_all(self):
        state = ViewState()
        
        selected = toggle_category(state, 'News')
        assert selected.selected_category_id == 'News'
        
        cleared = toggle_category(selected, 'News')
        assert cleared.selected_category_id is None
        assert cleared == state
    
    def test_toggle_different_category_switches(self):
        state = toggle_category(ViewState(), 'News')
        assert toggle_category(state, 'Sports').selected_category_id == 'Sports'
    
    def test_set_search_keeps_other_fields(self):
        state = ViewState(selected_category_id='News', favorite_ids=frozenset({'a'}))
        updated = set_search(state, 'abc')
        
        assert updated.search_query == 'abc'
        assert updated.selected_category_id == 'News'
        assert updated.favorite_ids == frozenset({'a'})
        assert state.search_query == ''
    
    def test_toggle_favorite(self):
        ids = toggle_favorite(frozenset(), 'a')
        assert ids == frozenset({'a'})
        assert toggle_favorite(ids, 'a') == frozenset()
