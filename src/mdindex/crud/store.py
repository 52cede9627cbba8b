"""Persist a PostIndex to the posts table and load it back"""

import datetime
import logging

from sqlmodel import Session, select

from mdindex.core.index import PostIndex
from mdindex.core.models import PostRecord
from mdindex.crud.models import PostRow


logger = logging.getLogger(__name__)


def _record_to_row(record: PostRecord, position: int, indexed_at: datetime.datetime) -> PostRow:
    return PostRow(
        slug=record.slug,
        source=record.source,
        position=position,
        content_hash=record.content_hash,
        title=record.title,
        date=record.date,
        excerpt=record.excerpt,
        tags=list(record.tags),
        featured=record.featured,
        cover_image=record.cover_image,
        body=record.body,
        word_count=record.word_count,
        reading_time=record.reading_time,
        indexed_at=indexed_at,
    )


def _row_to_record(row: PostRow) -> PostRecord:
    return PostRecord(
        slug=row.slug,
        source=row.source,
        title=row.title,
        date=row.date,
        excerpt=row.excerpt,
        tags=tuple(row.tags or ()),
        featured=row.featured,
        cover_image=row.cover_image,
        body=row.body,
        word_count=row.word_count,
        reading_time=row.reading_time,
        content_hash=row.content_hash,
    )


def save_index(session: Session, index: PostIndex, indexed_at: datetime.datetime = None) -> int:
    """Replace every stored row with the index contents. Returns rows written.

    Flushes but does not commit; the caller controls the transaction.
    """
    indexed_at = indexed_at or datetime.datetime.now()
    for row in session.exec(select(PostRow)).all():
        session.delete(row)
    session.flush()

    records = index.records()
    for position, record in enumerate(records):
        session.add(_record_to_row(record, position, indexed_at))
    session.flush()
    logger.info("saved %d post(s)", len(records))
    return len(records)


def load_index(session: Session) -> PostIndex:
    """Rebuild a PostIndex from stored rows in their original insertion order."""
    rows = session.exec(select(PostRow).order_by(PostRow.position)).all()
    index = PostIndex()
    for collision in index.rebuild(_row_to_record(r) for r in rows):
        logger.warning("skipped stored post: %s", collision)
    return index


def last_indexed_at(session: Session) -> datetime.datetime | None:
    """Timestamp of the last saved ingest, or None when nothing is stored."""
    row = session.exec(select(PostRow).order_by(PostRow.indexed_at.desc())).first()
    return row.indexed_at if row else None
