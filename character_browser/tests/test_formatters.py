import unittest
from unittest.mock import MagicMock

from ..models.character import Character
from ..models.filters import CharacterFilters
from ..models.view_state import ViewState
from ..ui.controllers.status_bar import StatusBarController
from ..utils.formatters import character_row, format_date, format_response_time, or_dash, truncate_text
from .fakes import make_character


class TestFormatters(unittest.TestCase):
    def test_character_row(self):
        row = character_row(Character.from_api(make_character(7, "Abradolf Lincler", episodes=(1, 2, 3))))
        self.assertEqual(
            row,
            ("7", "Abradolf Lincler", "Alive", "Human", "—", "Male", "Location 1", "Location 3", "3"),
        )

    def test_or_dash(self):
        self.assertEqual(or_dash(""), "—")
        self.assertEqual(or_dash("   "), "—")
        self.assertEqual(or_dash("Parasite"), "Parasite")

    def test_format_date(self):
        self.assertEqual(format_date("2017-11-04T18:48:46.250Z"), "2017-11-04")
        self.assertEqual(format_date("December 2, 2013"), "December 2, 2013")
        self.assertEqual(format_date(None), "")

    def test_format_response_time(self):
        self.assertEqual(format_response_time(None), "-")
        self.assertEqual(format_response_time(87.4), "87 ms")
        self.assertEqual(format_response_time(1500), "1.50 s")

    def test_truncate_text(self):
        self.assertEqual(truncate_text("short", 10), "short")
        self.assertEqual(truncate_text("a" * 20, 10), "aaaaaaa...")


class TestStatusBar(unittest.TestCase):
    def setUp(self):
        self.bar = MagicMock()
        self.controller = StatusBarController(self.bar, "server")

    def test_loading(self):
        self.assertEqual(self.controller.render_text(ViewState(loading=True)), "Mode: server | Loading...")

    def test_summary(self):
        state = ViewState(
            filters=CharacterFilters(status="alive"),
            current_page=2,
            total_pages=9,
            total_count=170,
            items_per_page=20,
            response_time_ms=120.0,
        )
        text = self.controller.render_text(state)
        self.assertIn("Characters: 170", text)
        self.assertIn("Page: 2/9", text)
        self.assertIn("Filters: status=alive", text)
        self.assertIn("Response: 120 ms", text)

    def test_error_replaces_response_time(self):
        self.controller.update(ViewState(error="Could not load characters."))
        text = self.bar.update.call_args.args[0].plain
        self.assertIn("Error: Could not load characters.", text)
        self.assertNotIn("Response:", text)


if __name__ == "__main__":
    unittest.main()
