"""
Busy row shown above the table while a character fetch is in flight.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Label, LoadingIndicator


class LoadingOverlay(Horizontal):
    DEFAULT_CSS = """
    LoadingOverlay {
        height: 3;
        display: none;
    }

    LoadingOverlay LoadingIndicator {
        width: 10;
    }

    LoadingOverlay #loading-message {
        padding: 1 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()
        yield Label("Loading...", id="loading-message", markup=False)

    def start(self, message: str = "Loading...") -> None:
        self.query_one("#loading-message", Label).update(message)
        self.display = True

    def stop(self) -> None:
        self.display = False
