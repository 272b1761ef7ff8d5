# character_browser/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from character_browser.models.view_state import ViewState
from character_browser.utils.formatters import format_response_time, truncate_text


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    def __init__(self, status_bar: Static, mode: str) -> None:
        self._bar = status_bar
        self._mode = mode

    def update(self, state: ViewState) -> None:
        """Refresh the whole status line from the view state."""
        # Plain Text, so filter values are never parsed as markup
        text = Text(self.render_text(state))
        if state.error:
            text.highlight_words([f"Error: {state.error}"], style="bold red")
        self._bar.update(text)

    def render_text(self, state: ViewState) -> str:
        if state.loading:
            return f"Mode: {self._mode} | Loading..."

        parts: list[str] = [
            f"Characters: {state.total_count}",
            f"Page: {state.current_page}/{state.total_pages}",
            f"Per page: {state.items_per_page}",
            f"Mode: {self._mode}",
        ]

        query = state.filters.as_query()
        if query:
            summary = ", ".join(f"{k}={v}" for k, v in query.items())
            parts.append(f"Filters: {truncate_text(summary, 40)}")

        if state.error:
            parts.append(f"Error: {state.error}")
        else:
            parts.append(f"Response: {format_response_time(state.response_time_ms)}")

        selected = state.selected
        if selected:
            parts.append(f"Selected: {selected.name}")

        return " | ".join(parts)
