"""Validate parsed frontmatter and normalise it into a PostRecord"""

import datetime
import re

from mdindex.core.errors import ValidationError
from mdindex.core.models import FrontmatterFields, PostRecord
from mdindex.core.utils.hashing import sha256
from mdindex.core.utils.slug import slug_from_filename, slugify
from mdindex.core.utils.text import reading_time, word_count


ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
COVER_KEYS = ('coverImage', 'cover_image')


def _title(fields: FrontmatterFields, source: str) -> str:
    title = fields.get('title')
    if title is None or (isinstance(title, str) and not title.strip()):
        raise ValidationError(source, "missing title")
    if not isinstance(title, str):
        raise ValidationError(source, f"title must be a string, got {type(title).__name__}")
    return title.strip()


def _date(fields: FrontmatterFields, source: str) -> datetime.date:
    """Accept only a strict YYYY-MM-DD string naming a real calendar day."""
    value = fields.get('date')
    if isinstance(value, str) and ISO_DATE_RE.match(value.strip()):
        try:
            return datetime.date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(source, f"invalid date: {value!r}")


def _optional_str(fields: FrontmatterFields, key: str, source: str) -> str:
    value = fields.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(source, f"{key} must be a string, got {type(value).__name__}")
    return value


def _tags(fields: FrontmatterFields, source: str) -> tuple[str, ...]:
    """A bare string becomes a one-tag list; tags are kept as written and
    duplicates keep their first position."""
    value = fields.get('tags')
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise ValidationError(source, "tags must be a list of strings")
    if not all(t.strip() for t in value):
        raise ValidationError(source, "tags must not be blank")
    return tuple(dict.fromkeys(value))


def _featured(fields: FrontmatterFields, source: str) -> bool:
    value = fields.get('featured', False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(source, f"featured must be true or false, got {value!r}")
    return value


def _slug(fields: FrontmatterFields, source: str) -> str:
    explicit = fields.get('slug')
    if explicit is not None:
        if not isinstance(explicit, str):
            raise ValidationError(source, f"slug must be a string, got {type(explicit).__name__}")
        slug = slugify(explicit)
    else:
        slug = slug_from_filename(source)
    if not slug:
        raise ValidationError(source, "cannot derive a slug")
    return slug


def _cover_image(fields: FrontmatterFields, source: str) -> str:
    key = next((k for k in COVER_KEYS if fields.get(k) is not None), COVER_KEYS[0])
    return _optional_str(fields, key, source)


def build_record(
    fields: FrontmatterFields,
    body: str,
    source: str,
    raw_text: str = None,
    words_per_minute: int = 200,
    ) -> PostRecord:
    """Return a validated PostRecord, or raise ValidationError naming the first bad field.

    raw_text is the full file content used for the change-detection hash;
    it defaults to the body when the caller has no original text.
    """
    words = word_count(body)
    return PostRecord(
        title=_title(fields, source),
        date=_date(fields, source),
        excerpt=_optional_str(fields, 'excerpt', source),
        tags=_tags(fields, source),
        featured=_featured(fields, source),
        cover_image=_cover_image(fields, source),
        slug=_slug(fields, source),
        source=source,
        body=body,
        word_count=words,
        reading_time=reading_time(words, words_per_minute),
        content_hash=sha256(raw_text if raw_text is not None else body),
    )
