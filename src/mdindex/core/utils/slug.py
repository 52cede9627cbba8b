"""Slug generation for post identifiers"""

import re
from pathlib import PurePath


DATE_PREFIX_RE = re.compile(r'^\d{4}-\d{2}-\d{2}[-_ ]+')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def slug_from_filename(source: str) -> str:
    """Derive a slug from a file name: drop extension and any YYYY-MM-DD- prefix."""
    stem = PurePath(source).stem
    return slugify(DATE_PREFIX_RE.sub('', stem))
