"""Read-only queries over a PostIndex: listing, lookup, tag filter, featured"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from mdindex.core.index import PostIndex
from mdindex.core.models import PostRecord


@dataclass(frozen=True)
class Page:
    """One 1-based page of results plus the size of the full result set."""
    items:     tuple[PostRecord, ...]
    page:      int
    page_size: int
    total:     int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    def __iter__(self) -> Iterator[PostRecord]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class PostQuery:
    """Query layer; never mutates the index and never raises for missing data."""

    def __init__(self, index: PostIndex, page_size: int = 10):
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.index = index
        self.page_size = page_size

    def _paginate(self, records: Sequence[PostRecord], page: int, page_size: Optional[int]) -> Page:
        size = self.page_size if page_size is None else page_size
        if size < 1:
            raise ValueError(f"page_size must be >= 1, got {size}")
        items = tuple(records[(page - 1) * size: page * size]) if page >= 1 else ()
        return Page(items=items, page=page, page_size=size, total=len(records))

    def list_posts(self, page: int = 1, page_size: int = None) -> Page:
        """Posts newest first; pages past the end are empty."""
        return self._paginate(self.index.by_date(), page, page_size)

    def get_by_slug(self, slug: str) -> Optional[PostRecord]:
        return self.index.get(slug)

    def filter_by_tag(self, tag: str, page: int = 1, page_size: int = None) -> Page:
        """Posts carrying exactly tag, newest first; unknown tags give an empty page."""
        return self._paginate(self.index.tagged(tag), page, page_size)

    def list_featured(self) -> tuple[PostRecord, ...]:
        return self.index.featured()

    def list_tags(self) -> list[tuple[str, int]]:
        return self.index.tags()
