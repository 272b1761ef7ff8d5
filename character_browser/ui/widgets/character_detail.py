"""
Character detail widget with expandable episode / origin / location sections.
"""

from __future__ import annotations

from typing import List, Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.reactive import var
from textual.widgets import Label, Static

from character_browser.models.character import Character, LocationDetail
from character_browser.models.view_state import ExpansionKind
from character_browser.utils.formatters import format_date, or_dash, truncate_text

SECTION_TITLES = {
    ExpansionKind.EPISODES: "Episodes",
    ExpansionKind.ORIGIN: "Origin",
    ExpansionKind.LOCATION: "Location",
}


class CharacterDetail(Container):
    """Scrollable detail pane for a Character."""

    DEFAULT_CSS = """
    CharacterDetail {
        height: auto;
        max-height: 50%;
        border: round $accent;
    }

    CharacterDetail .detail-label {
        width: 12;
        text-style: bold;
    }

    CharacterDetail .section-title {
        margin-top: 1;
        text-style: bold underline;
    }
    """

    character: var[Optional[Character]] = var(None)

    # ------------------------------------------------------------------ #
    # compose
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="character-detail-scroll"):
            yield Label("No Character Selected", id="detail-title", markup=False)
            yield Horizontal(Label("Status:", classes="detail-label"), Label("-", id="detail-status"), classes="detail-row")
            yield Horizontal(Label("Species:", classes="detail-label"), Label("-", id="detail-species"), classes="detail-row")
            yield Horizontal(Label("Gender:", classes="detail-label"), Label("-", id="detail-gender"), classes="detail-row")
            yield Horizontal(Label("Created:", classes="detail-label"), Label("-", id="detail-created"), classes="detail-row")
            yield Label("[e] episodes  [o] origin  [l] location", id="detail-hint", markup=False)
            for kind, title in SECTION_TITLES.items():
                yield Label(title, id=f"{kind.value}-title", classes="section-title")
                yield Static("", id=f"{kind.value}-body", markup=False)

    def on_mount(self) -> None:
        self.show_character(None)

    # ------------------------------------------------------------------ #
    # public API
    # ------------------------------------------------------------------ #

    def show_character(self, character: Optional[Character]) -> None:
        """Populate the summary rows (or clear if None); sections collapse."""
        self.character = character

        title = self.query_one("#detail-title", Label)
        rows = {
            "#detail-status": lambda c: c.status,
            "#detail-species": lambda c: f"{c.species} ({or_dash(c.type)})",
            "#detail-gender": lambda c: c.gender,
            "#detail-created": lambda c: format_date(c.created) or "-",
        }

        if character:
            title.update(f"#{character.id} {character.name}")
            for selector, value in rows.items():
                self.query_one(selector, Label).update(value(character))
        else:
            title.update("No Character Selected")
            for selector in rows:
                self.query_one(selector, Label).update("-")

        self.query_one("#detail-hint", Label).display = character is not None
        for kind in ExpansionKind:
            self.collapse(kind)

    def collapse(self, kind: ExpansionKind) -> None:
        self.query_one(f"#{kind.value}-title", Label).display = False
        body = self.query_one(f"#{kind.value}-body", Static)
        body.update("")
        body.display = False

    def show_loading(self, kind: ExpansionKind) -> None:
        self._show(kind, "Loading...")

    def show_episodes(self, names: List[str], first_episode_cast: Optional[List[str]] = None) -> None:
        """Episode list, plus who else appears in the first episode."""
        lines = [f"• {name}" for name in names] or ["No episodes."]
        if first_episode_cast:
            lines.append("")
            lines.append("Also in the first episode: " + ", ".join(first_episode_cast))
        self._show(ExpansionKind.EPISODES, "\n".join(lines))

    def show_place(
        self,
        kind: ExpansionKind,
        name: str,
        detail: Optional[LocationDetail],
        residents: List[Character],
    ) -> None:
        """Render an origin / location section."""
        if detail is None:
            self._show(kind, f"{name}\nNo further details available.")
            return

        lines = [
            detail.name,
            f"Type: {or_dash(detail.type)}",
            f"Dimension: {or_dash(detail.dimension)}",
            f"Residents ({len(detail.residents)}):",
        ]
        lines.extend(f"  • {truncate_text(r.name, 40)} ({r.status})" for r in residents)
        if len(detail.residents) > len(residents):
            lines.append(f"  … and {len(detail.residents) - len(residents)} more")
        self._show(kind, "\n".join(lines))

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _show(self, kind: ExpansionKind, text: str) -> None:
        self.query_one(f"#{kind.value}-title", Label).display = True
        body = self.query_one(f"#{kind.value}-body", Static)
        body.update(text)
        body.display = True
