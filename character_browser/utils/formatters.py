"""
Display helpers shared by the table, detail pane and status bar.
"""

from datetime import datetime
from typing import Optional

from character_browser.models.character import Character

BLANK = "—"


def format_date(value: Optional[str], format_str: str = "%Y-%m-%d") -> str:
    """
    Render an API timestamp such as ``2017-11-04T18:48:46.250Z``.

    Anything that is not ISO 8601 (episode air dates are free text, e.g.
    "December 2, 2013") comes back unchanged; empty values give "".
    """
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime(format_str)
    except ValueError:
        return value


def format_response_time(ms: Optional[float]) -> str:
    if ms is None:
        return "-"
    if ms >= 1000:
        return f"{ms / 1000:.2f} s"
    return f"{ms:.0f} ms"


def or_dash(value: str) -> str:
    """Blank API strings (e.g. an empty type) render as an em dash."""
    return value if value and value.strip() else BLANK


def character_row(character: Character) -> tuple:
    """Cells for one table row, in column order."""
    return (
        str(character.id),
        character.name,
        character.status,
        character.species,
        or_dash(character.type),
        character.gender,
        character.origin.name,
        character.location.name,
        str(character.episode_count),
    )


def truncate_text(text: str, max_length: int = 50, ellipsis: str = "...") -> str:
    if not text or len(text) <= max_length:
        return text or ""
    return text[:max_length - len(ellipsis)] + ellipsis
