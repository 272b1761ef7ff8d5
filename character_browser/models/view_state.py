"""
Immutable view state for the characters screen and the pure transitions
that update it.

Every user action and every fetch outcome goes through `reduce`. Fetch
outcomes carry the id of the request that produced them; anything but the
latest request is ignored, so a slow stale response can never overwrite
fresher state.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union

from character_browser.models.character import Character
from character_browser.models.filters import CharacterFilters
from character_browser.models.pagination import PAGE_SIZES, Page


class ExpansionKind(Enum):
    EPISODES = "episodes"
    ORIGIN = "origin"
    LOCATION = "location"


@dataclass(frozen=True, slots=True)
class ViewState:
    filters: CharacterFilters = field(default_factory=CharacterFilters)
    sort: str = "name-az"
    current_page: int = 1
    items_per_page: int = 20

    characters: Tuple[Character, ...] = ()
    total_pages: int = 1
    total_count: int = 0
    loading: bool = False
    error: Optional[str] = None
    response_time_ms: Optional[float] = None
    latest_request: int = 0

    selected_id: Optional[int] = None
    expanded: FrozenSet[Tuple[ExpansionKind, int]] = frozenset()

    def is_expanded(self, kind: ExpansionKind, character_id: int) -> bool:
        return (kind, character_id) in self.expanded

    @property
    def selected(self) -> Optional[Character]:
        if self.selected_id is None:
            return None
        return next((c for c in self.characters if c.id == self.selected_id), None)


# ---------------------------------------------------------------------- #
# actions
# ---------------------------------------------------------------------- #

@dataclass(frozen=True, slots=True)
class SetFilter:
    field: str
    value: str


@dataclass(frozen=True, slots=True)
class ResetFilters:
    pass


@dataclass(frozen=True, slots=True)
class SetSort:
    key: str


@dataclass(frozen=True, slots=True)
class SetPageSize:
    size: int


@dataclass(frozen=True, slots=True)
class SetPage:
    page: int


@dataclass(frozen=True, slots=True)
class FetchStarted:
    request_id: int


@dataclass(frozen=True, slots=True)
class FetchSucceeded:
    request_id: int
    page: Page[Character]
    response_time_ms: Optional[float] = None


@dataclass(frozen=True, slots=True)
class FetchFailed:
    request_id: int
    message: str


@dataclass(frozen=True, slots=True)
class SelectCharacter:
    character_id: Optional[int]


@dataclass(frozen=True, slots=True)
class ToggleExpanded:
    kind: ExpansionKind
    character_id: int


Action = Union[
    SetFilter, ResetFilters, SetSort, SetPageSize, SetPage,
    FetchStarted, FetchSucceeded, FetchFailed,
    SelectCharacter, ToggleExpanded,
]


# ---------------------------------------------------------------------- #
# reducer
# ---------------------------------------------------------------------- #

def reduce(state: ViewState, action: Action) -> ViewState:
    """Return the state that follows `action`. Never mutates `state`."""
    if isinstance(action, SetFilter):
        return replace(state, filters=state.filters.with_value(action.field, action.value), current_page=1)

    if isinstance(action, ResetFilters):
        return replace(state, filters=CharacterFilters(), current_page=1)

    if isinstance(action, SetSort):
        return replace(state, sort=action.key)

    if isinstance(action, SetPageSize):
        if action.size not in PAGE_SIZES:
            raise ValueError(f"Unsupported page size {action.size}")
        return replace(state, items_per_page=action.size, current_page=1)

    if isinstance(action, SetPage):
        page = min(max(1, action.page), max(1, state.total_pages))
        return replace(state, current_page=page)

    if isinstance(action, FetchStarted):
        return replace(state, loading=True, error=None, latest_request=action.request_id)

    if isinstance(action, FetchSucceeded):
        if action.request_id != state.latest_request:
            return state
        page = action.page
        return replace(
            state,
            characters=tuple(page.items),
            total_pages=max(1, page.pages),
            total_count=page.total,
            loading=False,
            error=None,
            response_time_ms=action.response_time_ms,
        )

    if isinstance(action, FetchFailed):
        if action.request_id != state.latest_request:
            return state
        return replace(
            state,
            characters=(),
            current_page=1,
            total_pages=1,
            total_count=0,
            loading=False,
            error=action.message,
            response_time_ms=None,
        )

    if isinstance(action, SelectCharacter):
        return replace(state, selected_id=action.character_id)

    if isinstance(action, ToggleExpanded):
        key = (action.kind, action.character_id)
        expanded = state.expanded - {key} if key in state.expanded else state.expanded | {key}
        return replace(state, expanded=frozenset(expanded))

    raise TypeError(f"Unknown action: {action!r}")


class RequestSequence:
    """Hands out monotonically increasing request ids."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def next(self) -> int:
        return next(self._counter)
