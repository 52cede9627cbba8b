"""In-memory post index: by-date, by-tag and featured views kept in sync"""

import bisect
import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

from mdindex.core.errors import SlugCollisionError
from mdindex.core.models import PostRecord


logger = logging.getLogger(__name__)


def _sort_key(record: PostRecord) -> tuple[int, str]:
    """Date descending, then slug ascending."""
    return (-record.date.toordinal(), record.slug)


@dataclass(frozen=True)
class IndexSnapshot:
    """Immutable copy of the derived views, comparable across ingest runs."""
    by_date:  tuple[str, ...]
    by_tag:   dict[str, tuple[str, ...]]
    featured: tuple[str, ...]


class PostIndex:
    """Owns every PostRecord of one collection and the views derived from them.

    Writers and readers share one re-entrant lock, so a reader never observes
    a record present in one view but missing from another.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._reset()

    def _reset(self) -> None:
        self._records: dict[str, PostRecord] = {}
        self._sources: dict[str, str] = {}          # source -> slug
        self._date_keys: list[tuple[int, str]] = []
        self._featured_keys: list[tuple[int, str]] = []
        self._tags: dict[str, dict[str, None]] = {}  # tag -> ordered slug set

    # --- writes ---

    def upsert(self, record: PostRecord) -> str:
        """Insert or wholesale-replace the record for record.source.

        Returns 'created', 'updated' or 'unchanged'. Raises SlugCollisionError,
        leaving the index untouched, when another source already owns the slug.
        """
        with self._lock:
            owner = self._records.get(record.slug)
            if owner is not None and owner.source != record.source:
                raise SlugCollisionError(record.source, record.slug, owner.source)

            previous_slug = self._sources.get(record.source)
            previous = self._records.get(previous_slug) if previous_slug else None
            if previous == record:
                return 'unchanged'
            if previous is not None:
                self._unlink(previous, keep_tags=set(record.tags) if previous.slug == record.slug else set())
            self._link(record)
            status = 'updated' if previous is not None else 'created'
            logger.debug("%s %s from %s", status, record.slug, record.source)
            return status

    def remove(self, slug: str) -> Optional[PostRecord]:
        """Drop a record from every view. Returns it, or None if absent."""
        with self._lock:
            record = self._records.get(slug)
            if record is not None:
                self._unlink(record)
            return record

    def remove_source(self, source: str) -> Optional[PostRecord]:
        with self._lock:
            slug = self._sources.get(source)
            return self.remove(slug) if slug else None

    def rebuild(self, records: Iterable[PostRecord]) -> list[SlugCollisionError]:
        """Replace all contents with records, first-seen wins on slug collisions.

        The new views are built aside and swapped in at once. Returns the
        collisions that were rejected.
        """
        staged = PostIndex()
        collisions = []
        for record in records:
            try:
                staged.upsert(record)
            except SlugCollisionError as e:
                collisions.append(e)
        with self._lock:
            self._records = staged._records
            self._sources = staged._sources
            self._date_keys = staged._date_keys
            self._featured_keys = staged._featured_keys
            self._tags = staged._tags
        return collisions

    def _link(self, record: PostRecord) -> None:
        key = _sort_key(record)
        self._records[record.slug] = record
        self._sources[record.source] = record.slug
        bisect.insort(self._date_keys, key)
        if record.featured:
            bisect.insort(self._featured_keys, key)
        for tag in record.tags:
            self._tags.setdefault(tag, {}).setdefault(record.slug, None)

    def _unlink(self, record: PostRecord, keep_tags: set[str] = frozenset()) -> None:
        """Remove record from the views; slugs stay in place in keep_tags buckets."""
        key = _sort_key(record)
        del self._records[record.slug]
        self._sources.pop(record.source, None)
        self._date_keys.pop(bisect.bisect_left(self._date_keys, key))
        if record.featured:
            self._featured_keys.pop(bisect.bisect_left(self._featured_keys, key))
        for tag in record.tags:
            if tag in keep_tags:
                continue
            bucket = self._tags[tag]
            bucket.pop(record.slug, None)
            if not bucket:
                del self._tags[tag]

    # --- reads ---

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, slug: str) -> bool:
        with self._lock:
            return slug in self._records

    def get(self, slug: str) -> Optional[PostRecord]:
        with self._lock:
            return self._records.get(slug)

    def owner(self, slug: str) -> Optional[str]:
        """Source that currently owns slug, if any."""
        with self._lock:
            record = self._records.get(slug)
            return record.source if record else None

    def records(self) -> tuple[PostRecord, ...]:
        """All records in the order they entered the index."""
        with self._lock:
            return tuple(self._records.values())

    def by_date(self) -> tuple[PostRecord, ...]:
        with self._lock:
            return tuple(self._records[slug] for _, slug in self._date_keys)

    def featured(self) -> tuple[PostRecord, ...]:
        with self._lock:
            return tuple(self._records[slug] for _, slug in self._featured_keys)

    def tag_slugs(self, tag: str) -> tuple[str, ...]:
        """Slugs carrying tag, in the order they joined the bucket."""
        with self._lock:
            return tuple(self._tags.get(tag, ()))

    def tagged(self, tag: str) -> tuple[PostRecord, ...]:
        """Records carrying tag, in by-date order."""
        with self._lock:
            bucket = self._tags.get(tag, {})
            return tuple(self._records[slug] for _, slug in self._date_keys if slug in bucket)

    def tags(self) -> list[tuple[str, int]]:
        """(tag, post count) pairs sorted by tag."""
        with self._lock:
            return sorted((tag, len(bucket)) for tag, bucket in self._tags.items())

    def snapshot(self) -> IndexSnapshot:
        with self._lock:
            return IndexSnapshot(
                by_date=tuple(slug for _, slug in self._date_keys),
                by_tag={tag: tuple(bucket) for tag, bucket in sorted(self._tags.items())},
                featured=tuple(slug for _, slug in self._featured_keys),
            )
