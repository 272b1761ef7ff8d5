# character_browser/ui/screens/characters_screen.py
"""
Main Characters screen: filter bar, table, pagination and detail pane
"""

from __future__ import annotations

import time
from typing import Any, Dict

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from simple_logger import Slogger

from character_browser.di import CharacterService
from character_browser.errors import BrowserError, FETCH_ERROR_MESSAGE
from character_browser.models.character import Character
from character_browser.models.view_state import (
    Action,
    ExpansionKind,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    RequestSequence,
    ResetFilters,
    SelectCharacter,
    SetFilter,
    SetPage,
    SetPageSize,
    SetSort,
    ToggleExpanded,
    ViewState,
    reduce,
)
from character_browser.services.detail_service import DetailService

# UI helpers
from character_browser.ui.controllers.status_bar import StatusBarController

# Widgets
from character_browser.ui.widgets.character_detail import CharacterDetail
from character_browser.ui.widgets.character_table import CharacterTable
from character_browser.ui.widgets.filter_bar import FilterBar
from character_browser.ui.widgets.loading_indicator import LoadingOverlay
from character_browser.ui.widgets.pagination import Pagination


class CharactersScreen(Screen):
    """Character listing with filters and an expandable detail pane."""

    BINDINGS = [
        Binding("f", "focus_search", "Search", show=True),
        Binding("n", "next_page", "Next Page", show=True),
        Binding("p", "prev_page", "Prev Page", show=True),
        Binding("e", "toggle_episodes", "Episodes", show=True),
        Binding("o", "toggle_origin", "Origin", show=True),
        Binding("l", "toggle_location", "Location", show=True),
        Binding("r", "reload", "Reload", show=True),
        Binding("escape", "clear_selection", "Clear Selection", show=False),
    ]

    # ------------------------------------------------------------------ #

    def __init__(
        self,
        character_service: CharacterService,
        detail_service: DetailService,
        config: Dict[str, Any],
        *,
        id: str = "characters_screen",
    ) -> None:
        super().__init__(id=id)

        ui = config.get("ui", {})
        self.character_service = character_service
        self.detail_service = detail_service
        self.episode_preview = ui.get("episode_preview", 5)
        self.resident_preview = ui.get("resident_preview", 10)

        self.state = ViewState(sort=ui.get("sort", "name-az"), items_per_page=ui.get("per_page", 20))
        self._requests = RequestSequence()

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Container(id="main-container"):
            with Vertical(id="content-area"):
                yield FilterBar(sort=self.state.sort, per_page=self.state.items_per_page, id="filter-bar")
                yield LoadingOverlay(id="loading-overlay")
                yield CharacterTable(id="characters-table")
                yield Pagination(id="pagination")
                yield CharacterDetail(id="character-detail")

        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(CharacterTable).styles.height = "1fr"
        self.status_controller = StatusBarController(
            self.query_one("#status-bar", Static),
            getattr(self.character_service, "mode", "server"),
        )
        self.load_characters()

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    def dispatch(self, action: Action) -> ViewState:
        self.state = reduce(self.state, action)
        return self.state

    def load_characters(self) -> None:
        """Start a fetch for the current state; older fetches become stale."""
        request_id = self._requests.next()
        self.dispatch(FetchStarted(request_id))
        self.query_one(LoadingOverlay).start(f"Loading page {self.state.current_page}...")
        self.status_controller.update(self.state)
        self.run_worker(self._fetch(request_id, self.state), group="characters")

    async def _fetch(self, request_id: int, state: ViewState) -> None:
        context = {
            "screen": "CharactersScreen",
            "request_id": request_id,
            "page": state.current_page,
            "per_page": state.items_per_page,
        }
        started = time.perf_counter()
        try:
            page = await self.character_service.page(
                page=state.current_page,
                per_page=state.items_per_page,
                filters=state.filters,
                sort=state.sort,
            )
        except BrowserError as e:
            Slogger.exception(e, "Failed to load characters", context)
            self.dispatch(FetchFailed(request_id, FETCH_ERROR_MESSAGE))
        else:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self.dispatch(FetchSucceeded(request_id, page, elapsed_ms))

        if request_id != self.state.latest_request:
            Slogger.debug("Dropped stale character response", context)
            return
        self._render_list()

    def _render_list(self) -> None:
        state = self.state
        self.query_one(LoadingOverlay).stop()
        self.query_one(CharacterTable).show(state.characters, state.selected_id)
        self.query_one(Pagination).update_pages(state.current_page, state.total_pages)
        self.status_controller.update(state)

        if state.error:
            self.notify(state.error, title="Error", severity="error", timeout=5)

    # ------------------------------------------------------------------ #
    # Action handlers
    # ------------------------------------------------------------------ #

    def action_focus_search(self) -> None:
        self.query_one(FilterBar).focus_input()

    def action_next_page(self) -> None:
        if self.state.current_page < self.state.total_pages:
            self.dispatch(SetPage(self.state.current_page + 1))
            self.load_characters()

    def action_prev_page(self) -> None:
        if self.state.current_page > 1:
            self.dispatch(SetPage(self.state.current_page - 1))
            self.load_characters()

    def action_reload(self) -> None:
        self.character_service.reload()
        self.load_characters()

    def action_clear_selection(self) -> None:
        self.dispatch(SelectCharacter(None))
        self.query_one(CharacterDetail).show_character(None)
        self.status_controller.update(self.state)

    def action_toggle_episodes(self) -> None:
        self._toggle(ExpansionKind.EPISODES)

    def action_toggle_origin(self) -> None:
        self._toggle(ExpansionKind.ORIGIN)

    def action_toggle_location(self) -> None:
        self._toggle(ExpansionKind.LOCATION)

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_filter_bar_filter_changed(self, event: FilterBar.FilterChanged) -> None:
        if getattr(self.state.filters, event.field) == event.value:
            return
        self.dispatch(SetFilter(event.field, event.value))
        self.load_characters()

    def on_filter_bar_sort_changed(self, event: FilterBar.SortChanged) -> None:
        if self.state.sort == event.key:
            return
        self.dispatch(SetSort(event.key))
        self.load_characters()

    def on_filter_bar_page_size_changed(self, event: FilterBar.PageSizeChanged) -> None:
        if self.state.items_per_page == event.size:
            return
        self.dispatch(SetPageSize(event.size))
        self.load_characters()

    def on_filter_bar_reset(self, event: FilterBar.Reset) -> None:
        if self.state.filters.is_empty():
            return
        self.dispatch(ResetFilters())
        self.load_characters()

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        if self.state.current_page != event.page:
            self.dispatch(SetPage(event.page))
            self.load_characters()

    def on_character_table_character_selected(self, event: CharacterTable.CharacterSelected) -> None:
        self.dispatch(SelectCharacter(event.character_id))
        character = self.state.selected
        self.query_one(CharacterDetail).show_character(character)
        self.status_controller.update(self.state)

        if character is None:
            return
        for kind in ExpansionKind:
            if self.state.is_expanded(kind, character.id):
                self._open_section(kind, character)

    # ------------------------------------------------------------------ #
    # Detail sections
    # ------------------------------------------------------------------ #

    def _toggle(self, kind: ExpansionKind) -> None:
        character = self.state.selected
        if character is None:
            self.notify("Select a character first", severity="warning", timeout=3)
            return

        self.dispatch(ToggleExpanded(kind, character.id))
        if self.state.is_expanded(kind, character.id):
            self._open_section(kind, character)
        else:
            self.query_one(CharacterDetail).collapse(kind)

    def _open_section(self, kind: ExpansionKind, character: Character) -> None:
        self.query_one(CharacterDetail).show_loading(kind)
        self.run_worker(self._load_section(kind, character), group="details")

    def _still_wanted(self, kind: ExpansionKind, character: Character) -> bool:
        return self.state.selected_id == character.id and self.state.is_expanded(kind, character.id)

    async def _load_section(self, kind: ExpansionKind, character: Character) -> None:
        detail = self.query_one(CharacterDetail)

        if kind is ExpansionKind.EPISODES:
            names = await self.detail_service.episode_names(character, self.episode_preview)
            cast = []
            if character.episode:
                _, cast = await self.detail_service.episode_characters(character.episode[0], self.resident_preview)
            if self._still_wanted(kind, character):
                detail.show_episodes(names, [c.name for c in cast if c.id != character.id])
            return

        place = character.origin if kind is ExpansionKind.ORIGIN else character.location
        location = await self.detail_service.location_detail(place)
        residents = await self.detail_service.residents(location, self.resident_preview)
        if self._still_wanted(kind, character):
            detail.show_place(kind, place.name, location, residents)
