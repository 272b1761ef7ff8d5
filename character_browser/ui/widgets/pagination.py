"""
Pagination widget for navigating through character results
"""

from typing import List, Optional, Union

from textual.containers import Container, Horizontal
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Button, Label

# Placeholder for a run of hidden page numbers.
ELLIPSIS = "…"

# Pages shown on each side of the current one.
WINDOW_RADIUS = 2


def page_window(current: int, total: int) -> List[Union[int, str]]:
    """
    Page numbers to offer as buttons: the first page, a run of up to five
    pages centred on `current`, and the last page, with ELLIPSIS where
    pages are skipped.

    >>> page_window(5, 10)
    [1, '…', 3, 4, 5, 6, 7, '…', 10]
    """
    if total <= 1:
        return [1]

    current = min(max(1, current), total)
    start = max(2, current - WINDOW_RADIUS)
    end = min(total - 1, current + WINDOW_RADIUS)

    pages: List[Union[int, str]] = [1]
    if start > 2:
        pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < total - 1:
        pages.append(ELLIPSIS)
    pages.append(total)
    return pages


class PageButton(Button):
    """A button that jumps to one page."""

    def __init__(self, page: int, *, current: bool = False) -> None:
        super().__init__(str(page), classes="page-button current" if current else "page-button")
        self.page = page
        self.disabled = current


class Pagination(Container):
    """
    Pagination widget with prev / next buttons and a window of page buttons
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        content-align: center middle;
    }

    Pagination Button {
        min-width: 5;
        margin: 0 1;
    }

    Pagination #page-buttons {
        width: auto;
        height: 3;
    }

    Pagination .ellipsis {
        padding: 1 1;
    }
    """

    current_page = reactive(1)
    total_pages = reactive(1)

    class PageChanged(Message):
        """Page changed message"""
        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)

    def compose(self):
        """Create child widgets"""
        yield Button("< Prev", id="prev-page")
        yield Horizontal(id="page-buttons")
        yield Button("Next >", id="next-page")

    def on_mount(self) -> None:
        self.update_pages(self.current_page, self.total_pages)

    def update_pages(self, current: int, total: int) -> None:
        """
        Rebuild the page buttons for new page information

        Args:
            current: Current page number
            total: Total pages
        """
        self.current_page = current
        self.total_pages = total

        holder = self.query_one("#page-buttons", Horizontal)
        holder.remove_children()
        holder.mount_all(
            Label(ELLIPSIS, classes="ellipsis") if item == ELLIPSIS else PageButton(item, current=item == current)
            for item in page_window(current, total)
        )

        self.query_one("#prev-page", Button).disabled = current <= 1
        self.query_one("#next-page", Button).disabled = current >= total

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        event.stop()
        new_page = self.current_page

        if isinstance(event.button, PageButton):
            new_page = event.button.page
        elif event.button.id == "prev-page" and self.current_page > 1:
            new_page = self.current_page - 1
        elif event.button.id == "next-page" and self.current_page < self.total_pages:
            new_page = self.current_page + 1

        if new_page != self.current_page:
            self.post_message(self.PageChanged(new_page))
