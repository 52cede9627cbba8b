"""Shared fixtures for crud unit tests"""

import datetime

import pytest
from sqlmodel import Session

from mdindex.core.index import PostIndex
from mdindex.core.models import PostRecord
from mdindex.crud.database import init_db, make_engine


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="index")
def index_fixture():
    """A small index with tags, a featured post and a cover image."""
    index = PostIndex()
    index.rebuild([
        PostRecord(slug="first", source="posts/first.md", title="First", date=datetime.date(2024, 1, 1),
                   tags=("php", "laravel"), body="# First\n", content_hash="a" * 64),
        PostRecord(slug="second", source="posts/second.md", title="Second", date=datetime.date(2024, 2, 1),
                   excerpt="Two", tags=("php",), featured=True, cover_image="/img/2.png",
                   word_count=420, reading_time=3, content_hash="b" * 64),
    ])
    return index
