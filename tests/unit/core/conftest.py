"""Shared fixtures for core unit tests"""

import datetime

import pytest

from mdindex.core.models import PostRecord


@pytest.fixture(name="make_record")
def make_record_fixture():
    """Factory for PostRecords with sensible defaults; source follows the slug."""
    def _make(slug: str, date: str = "2024-01-01", tags=(), featured: bool = False, **kwargs) -> PostRecord:
        kwargs.setdefault("source", f"posts/{slug}.md")
        kwargs.setdefault("title", slug.replace("-", " ").title())
        return PostRecord(
            slug=slug,
            date=datetime.date.fromisoformat(date),
            tags=tuple(tags),
            featured=featured,
            **kwargs,
        )
    return _make
