"""Domain models for API resources: characters, places and episodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from character_browser.errors import ParseError


def _id_from_url(url: str) -> Optional[int]:
    """`https://.../character/42` → 42 (None if the tail is not numeric)."""
    tail = url.rstrip("/").rsplit("/", 1)[-1] if url else ""
    return int(tail) if tail.isdigit() else None


def ids_from_urls(urls: List[str]) -> List[int]:
    """Resource ids referenced by `urls`, order kept, unparsable ones dropped."""
    ids = []
    for url in urls:
        resource_id = _id_from_url(url)
        if resource_id is not None:
            ids.append(resource_id)
    return ids


@dataclass(frozen=True, slots=True)
class PlaceRef:
    """Display name plus a resolvable reference to the full location."""

    name: str
    url: str = ""

    @property
    def is_known(self) -> bool:
        return bool(self.url)

    @classmethod
    def from_api(cls, doc: Optional[Dict[str, Any]]) -> "PlaceRef":
        doc = doc or {}
        return cls(name=doc.get("name") or "unknown", url=doc.get("url") or "")


@dataclass(frozen=True, slots=True)
class Character:
    id: int
    name: str
    status: str
    species: str
    type: str
    gender: str
    origin: PlaceRef
    location: PlaceRef
    image: str = ""
    episode: Tuple[str, ...] = ()
    url: str = ""
    created: str = ""

    # ---------- mappings ----------
    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Character":
        """Build a `Character` from an API JSON object."""
        if not isinstance(doc, dict) or "id" not in doc:
            raise ParseError(f"Not a character object: {doc!r:.80}")

        try:
            return cls(
                id=int(doc["id"]),
                name=doc.get("name", ""),
                status=doc.get("status", ""),
                species=doc.get("species", ""),
                type=doc.get("type", ""),
                gender=doc.get("gender", ""),
                origin=PlaceRef.from_api(doc.get("origin")),
                location=PlaceRef.from_api(doc.get("location")),
                image=doc.get("image", ""),
                episode=tuple(doc.get("episode") or ()),
                url=doc.get("url", ""),
                created=doc.get("created", ""),
            )
        except (TypeError, ValueError) as e:
            raise ParseError(f"Malformed character object: {e}") from e

    @classmethod
    def list_from_api(cls, doc: Any) -> List["Character"]:
        """
        Batch lookups answer a single object for one id and an array for
        several; both come back as a list.
        """
        if isinstance(doc, dict):
            doc = [doc]
        if not isinstance(doc, list):
            raise ParseError("Character lookup returned neither an object nor an array")
        return [cls.from_api(item) for item in doc]

    @property
    def episode_count(self) -> int:
        return len(self.episode)


@dataclass(frozen=True, slots=True)
class LocationDetail:
    id: int
    name: str
    type: str
    dimension: str
    residents: Tuple[str, ...] = ()
    url: str = ""

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "LocationDetail":
        if not isinstance(doc, dict) or "id" not in doc:
            raise ParseError(f"Not a location object: {doc!r:.80}")
        try:
            return cls(
                id=int(doc["id"]),
                name=doc.get("name", ""),
                type=doc.get("type", ""),
                dimension=doc.get("dimension", ""),
                residents=tuple(doc.get("residents") or ()),
                url=doc.get("url", ""),
            )
        except (TypeError, ValueError) as e:
            raise ParseError(f"Malformed location object: {e}") from e


@dataclass(frozen=True, slots=True)
class Episode:
    id: int
    name: str
    air_date: str = ""
    code: str = ""
    characters: Tuple[str, ...] = ()
    url: str = ""

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Episode":
        if not isinstance(doc, dict) or "name" not in doc:
            raise ParseError(f"Not an episode object: {doc!r:.80}")
        try:
            return cls(
                id=int(doc.get("id", 0)),
                name=doc["name"],
                air_date=doc.get("air_date", ""),
                code=doc.get("episode", ""),
                characters=tuple(doc.get("characters") or ()),
                url=doc.get("url", ""),
            )
        except (TypeError, ValueError) as e:
            raise ParseError(f"Malformed episode object: {e}") from e


@dataclass(frozen=True, slots=True)
class UpstreamPage:
    """One page exactly as the API served it."""

    results: Tuple[Character, ...]
    pages: int
    count: int

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "UpstreamPage":
        """Build from `{info: {count, pages}, results: [...]}`."""
        if not isinstance(doc, dict):
            raise ParseError("Character page is not a JSON object")
        info = doc.get("info")
        results = doc.get("results")
        if not isinstance(info, dict) or not isinstance(results, list):
            raise ParseError("Character page is missing 'info' or 'results'")
        try:
            pages = int(info.get("pages", 1))
            count = int(info.get("count", len(results)))
        except (TypeError, ValueError) as e:
            raise ParseError(f"Malformed page info: {e}") from e
        return cls(
            results=tuple(Character.from_api(item) for item in results),
            pages=pages,
            count=count,
        )
