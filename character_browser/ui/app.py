"""
Main Textual application class for the Character Browser
"""

from __future__ import annotations

from typing import Any, Dict

from simple_logger import Slogger

from textual.app import App
from textual.binding import Binding

from character_browser.di import build_container, Container
from character_browser.ui.screens.characters_screen import CharactersScreen


class CharacterBrowserApp(App):
    """A terminal data table over the Rick and Morty character API."""

    TITLE = "Rick and Morty Characters"

    CSS = """
    #content-area {
        height: 1fr;
    }

    #status-bar {
        height: 1;
        background: $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    # ------------------------------------------------------------------ #
    # init / mount
    # ------------------------------------------------------------------ #

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__()
        self.config = config
        self.container: Container = build_container(config)

    def on_mount(self) -> None:
        Slogger.info(
            "Character browser started",
            {"mode": self.config["ui"]["mode"], "base_url": self.config["api"]["base_url"]},
        )
        self.push_screen(
            CharactersScreen(
                character_service=self.container.character_service,
                detail_service=self.container.detail_service,
                config=self.config,
            )
        )

    async def on_unmount(self) -> None:
        await self.container.close()
        Slogger.info("Character browser stopped", self.container.detail_service.cache.stats())
