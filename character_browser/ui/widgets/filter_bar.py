"""
Filter bar widget: text filters, status / gender selects, sort order and page size
"""

from typing import Optional

from textual.containers import Container, Horizontal
from textual.message import Message
from textual.widgets import Button, Input, Select

from character_browser.models.filters import GENDER_OPTIONS, STATUS_OPTIONS
from character_browser.models.pagination import PAGE_SIZES

SORT_LABELS = (
    ("Name A-Z", "name-az"),
    ("Name Z-A", "name-za"),
    ("ID ascending", "id-asc"),
    ("ID descending", "id-desc"),
)

TEXT_FILTERS = ("name", "species", "type")


class FilterBar(Container):
    """
    Every control posts a message; the owning screen decides what to refetch
    """

    DEFAULT_CSS = """
    FilterBar {
        height: auto;
    }

    FilterBar Horizontal {
        height: auto;
    }

    FilterBar Input {
        width: 1fr;
    }

    FilterBar Select {
        width: 22;
    }
    """

    class FilterChanged(Message):
        """A filter field changed (name, status, species, type or gender)"""
        def __init__(self, field: str, value: str) -> None:
            super().__init__()
            self.field = field
            self.value = value

    class SortChanged(Message):
        def __init__(self, key: str) -> None:
            super().__init__()
            self.key = key

    class PageSizeChanged(Message):
        def __init__(self, size: int) -> None:
            super().__init__()
            self.size = size

    class Reset(Message):
        """All filters cleared"""

    def __init__(
        self,
        *,
        sort: str = "name-az",
        per_page: int = 20,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._sort = sort
        self._per_page = per_page

    def compose(self):
        """Create child widgets"""
        with Horizontal():
            yield Input(placeholder="Search by name...", id="filter-name")
            yield Input(placeholder="Species", id="filter-species")
            yield Input(placeholder="Type", id="filter-type")
        with Horizontal():
            yield Select(
                [("All statuses", "")] + [(s.title(), s) for s in STATUS_OPTIONS],
                value="", allow_blank=False, id="filter-status",
            )
            yield Select(
                [("All genders", "")] + [(g.title(), g) for g in GENDER_OPTIONS],
                value="", allow_blank=False, id="filter-gender",
            )
            yield Select(list(SORT_LABELS), value=self._sort, allow_blank=False, id="sort-order")
            yield Select(
                [(f"{size} per page", size) for size in PAGE_SIZES],
                value=self._per_page, allow_blank=False, id="page-size",
            )
            yield Button("Reset", id="reset-filters")

    def focus_input(self) -> None:
        """Focus the name search input"""
        self.query_one("#filter-name", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle input submission (Enter key)"""
        event.stop()
        field = (event.input.id or "").removeprefix("filter-")
        if field in TEXT_FILTERS:
            self.post_message(self.FilterChanged(field, event.value))

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        select_id = event.select.id
        if select_id in ("filter-status", "filter-gender"):
            self.post_message(self.FilterChanged(select_id.removeprefix("filter-"), event.value))
        elif select_id == "sort-order":
            self.post_message(self.SortChanged(event.value))
        elif select_id == "page-size":
            self.post_message(self.PageSizeChanged(int(event.value)))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "reset-filters":
            event.stop()
            with self.prevent(Input.Changed, Select.Changed):
                for input_id in ("#filter-name", "#filter-species", "#filter-type"):
                    self.query_one(input_id, Input).value = ""
                for select_id in ("#filter-status", "#filter-gender"):
                    self.query_one(select_id, Select).value = ""
            self.post_message(self.Reset())
