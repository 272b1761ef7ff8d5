"""Page-of-results container and the logical-to-upstream page mapping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

# The upstream API always serves this many items per page.
UPSTREAM_PAGE_SIZE = 20

# Page sizes offered to the user.
PAGE_SIZES = (5, 10, 20, 30, 50)


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """A single page of items plus meta-data."""

    items: Sequence[T]
    total: int           # total items in the whole result set
    pages: int           # total number of pages
    page: int            # current page index (1-based)

    per_page: int        # size of each page (for convenience)

    # ------------- helpers -------------
    def has_next(self) -> bool:
        return self.page < self.pages

    def has_prev(self) -> bool:
        return self.page > 1


@dataclass(frozen=True, slots=True)
class PageMapper:
    """
    Maps a 1-based logical page of `per_page` items onto the fixed-size
    pages served upstream.

    Two strategies are available:

    * single-fetch (`api_page`, `start_index`, `slice`): one upstream page,
      sliced. Exact only when `per_page` divides the upstream page size.
    * stitched (`upstream_pages`, `stitch`): every upstream page that overlaps
      the logical page is fetched and the slice is cut from their
      concatenation. Exact for every page size.
    """

    current_page: int
    per_page: int
    upstream_size: int = UPSTREAM_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.current_page < 1:
            raise ValueError(f"current_page must be >= 1, got {self.current_page}")
        if self.per_page not in PAGE_SIZES:
            raise ValueError(f"per_page must be one of {PAGE_SIZES}, got {self.per_page}")
        if self.upstream_size < 1:
            raise ValueError(f"upstream_size must be >= 1, got {self.upstream_size}")

    # ------------------------------------------------------------------ #
    # single-fetch mapping
    # ------------------------------------------------------------------ #

    @property
    def api_page(self) -> int:
        return math.ceil(self.current_page * self.per_page / self.upstream_size)

    @property
    def start_index(self) -> int:
        return ((self.current_page - 1) * self.per_page) % self.upstream_size

    @property
    def is_aligned(self) -> bool:
        """True when every logical page sits inside exactly one upstream page."""
        return self.per_page <= self.upstream_size and self.upstream_size % self.per_page == 0

    def slice(self, upstream_results: Sequence[T]) -> List[T]:
        """Cut the logical page out of the single upstream page `api_page`."""
        return list(upstream_results[self.start_index:self.start_index + self.per_page])

    # ------------------------------------------------------------------ #
    # stitched mapping
    # ------------------------------------------------------------------ #

    @property
    def first_item(self) -> int:
        """Global 0-based index of the first item on the logical page."""
        return (self.current_page - 1) * self.per_page

    @property
    def upstream_pages(self) -> range:
        """Upstream page numbers (1-based) overlapping the logical page."""
        first = self.first_item // self.upstream_size + 1
        last = (self.first_item + self.per_page - 1) // self.upstream_size + 1
        return range(first, last + 1)

    def stitch(self, pages_results: Sequence[Sequence[T]]) -> List[T]:
        """
        Cut the logical page out of the concatenated `upstream_pages` results.

        `pages_results` must be in the order of `upstream_pages`; it may be
        shorter when the tail pages do not exist upstream.
        """
        merged: List[T] = []
        for results in pages_results:
            merged.extend(results)
        offset = self.first_item - (self.upstream_pages.start - 1) * self.upstream_size
        return merged[offset:offset + self.per_page]

    # ------------------------------------------------------------------ #
    # totals
    # ------------------------------------------------------------------ #

    def estimate_total_pages(self, api_total_pages: int) -> int:
        """Logical page count assuming every upstream page is full."""
        return max(1, math.ceil(api_total_pages * self.upstream_size / self.per_page))

    def exact_total_pages(self, count: int) -> int:
        """Logical page count from the real item count."""
        return max(1, math.ceil(count / self.per_page))
