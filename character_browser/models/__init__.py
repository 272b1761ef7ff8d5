"""Character Browser data models."""

from character_browser.models.character import Character, Episode, LocationDetail, PlaceRef, UpstreamPage
from character_browser.models.filters import CharacterFilters
from character_browser.models.pagination import Page, PageMapper
from character_browser.models.view_state import ViewState

__all__ = [
    "Character",
    "CharacterFilters",
    "Episode",
    "LocationDetail",
    "Page",
    "PageMapper",
    "PlaceRef",
    "UpstreamPage",
    "ViewState",
]
