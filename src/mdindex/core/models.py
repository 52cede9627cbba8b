"""Data models for the parse -> build -> index pipeline"""

from dataclasses import dataclass
import datetime
from typing import Any, Union

from pydantic import BaseModel, ConfigDict


# Values as YAML loaded them (dates left as strings); coercion happens only in core.build.
FrontmatterValue = Union[str, bool, int, float, list, dict, None]
FrontmatterFields = dict[str, FrontmatterValue]


@dataclass(frozen=True)
class PostDocument:
    """Raw input read once from disk and discarded after parsing."""
    source: str
    text:   str


@dataclass(frozen=True)
class ParsedPost:
    """Frontmatter parser output: unvalidated fields plus the markdown body."""
    fields: FrontmatterFields
    body:   str


class PostRecord(BaseModel):
    """A validated, immutable blog post entry held in the index."""
    model_config = ConfigDict(frozen=True)

    slug:         str
    source:       str
    title:        str
    date:         datetime.date
    excerpt:      str = ""
    tags:         tuple[str, ...] = ()
    featured:     bool = False
    cover_image:  str = ""
    body:         str = ""
    word_count:   int = 0
    reading_time: int = 1           # minutes
    content_hash: str = ""

    def metadata(self) -> dict[str, Any]:
        """JSON-ready fields without the body."""
        return self.model_dump(mode="json", exclude={"body"})
