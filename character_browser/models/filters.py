"""Character filter values plus the in-memory filter / sort used in full-fetch mode."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Dict, Iterable, List

from character_browser.models.character import Character

SORT_KEYS = ("name-az", "name-za", "id-asc", "id-desc")

STATUS_OPTIONS = ("alive", "dead", "unknown")
GENDER_OPTIONS = ("female", "male", "genderless", "unknown")


@dataclass(frozen=True, slots=True)
class CharacterFilters:
    """Empty string means 'any'."""

    name: str = ""
    status: str = ""
    species: str = ""
    type: str = ""
    gender: str = ""

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def with_value(self, field: str, value: str) -> "CharacterFilters":
        if field not in self.field_names():
            raise ValueError(f"Unknown filter field: {field}")
        return replace(self, **{field: value})

    def as_query(self) -> Dict[str, str]:
        """Non-empty filters as API query parameters."""
        query = {}
        for name in self.field_names():
            value = getattr(self, name).strip()
            if value:
                query[name] = value
        return query

    def is_empty(self) -> bool:
        return not self.as_query()


def _same(value: str, wanted: str) -> bool:
    wanted = wanted.strip()
    return not wanted or value.casefold() == wanted.casefold()


def matches(character: Character, filters: CharacterFilters) -> bool:
    return (
        filters.name.strip().casefold() in character.name.casefold()
        and _same(character.status, filters.status)
        and _same(character.gender, filters.gender)
        and _same(character.species, filters.species)
        and _same(character.type, filters.type)
    )


def filter_characters(characters: Iterable[Character], filters: CharacterFilters) -> List[Character]:
    return [c for c in characters if matches(c, filters)]


def _name_key(character: Character):
    # casefolded collation first, raw string breaks ties deterministically
    return (character.name.casefold(), character.name)


def sort_characters(characters: Iterable[Character], sort_key: str) -> List[Character]:
    """Sort by one of SORT_KEYS; unknown keys keep the incoming order."""
    items = list(characters)
    if sort_key == "name-az":
        return sorted(items, key=_name_key)
    if sort_key == "name-za":
        return sorted(items, key=_name_key, reverse=True)
    if sort_key == "id-asc":
        return sorted(items, key=lambda c: c.id)
    if sort_key == "id-desc":
        return sorted(items, key=lambda c: c.id, reverse=True)
    return items
