"""
Custom DataTable widget for displaying characters
"""

from typing import Iterable, Optional

from textual.message import Message
from textual.widgets import DataTable

from character_browser.models.character import Character
from character_browser.utils.formatters import character_row

COLUMNS = ("ID", "Name", "Status", "Species", "Type", "Gender", "Origin", "Location", "Episodes")


class CharacterTable(DataTable):
    """
    DataTable of characters, one row per character keyed by its id
    """

    class CharacterSelected(Message):
        """A character row was chosen"""
        def __init__(self, character_id: int) -> None:
            super().__init__()
            self.character_id = character_id

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        self.add_columns(*COLUMNS)

    def show(self, characters: Iterable[Character], selected_id: Optional[int] = None) -> None:
        """Replace all rows, keeping the cursor on `selected_id` if present."""
        self.clear()
        selected_row: Optional[int] = None
        for idx, character in enumerate(characters):
            self.add_row(*character_row(character), key=str(character.id))
            if character.id == selected_id:
                selected_row = idx

        if selected_row is not None:
            self.move_cursor(row=selected_row, animate=False)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """
        Handle row selection and emit custom event

        Args:
            event: DataTable row selected event
        """
        event.stop()
        if event.row_key.value is not None:
            self.post_message(self.CharacterSelected(int(event.row_key.value)))
