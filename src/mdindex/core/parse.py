"""File discovery and frontmatter extraction"""

from pathlib import Path

import yaml

from mdindex.core.errors import ParseError
from mdindex.core.models import ParsedPost, PostDocument


DELIMITER = '---'
MD_EXTENSIONS = {'.md', '.mdx'}
TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates and timestamps as plain strings."""


FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def split_frontmatter(text: str, source: str = '<string>') -> ParsedPost:
    """Separate the YAML header from the markdown body.

    No opening `---` line: the whole text is the body and fields are empty.
    An opened block that never closes, invalid YAML, or a header that is not
    a mapping raises ParseError. Values are returned exactly as YAML loaded them,
    except that dates stay strings for core.build to validate.
    """
    lines = text.lstrip('\ufeff').splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return ParsedPost(fields={}, body=text)

    end = next((i for i in range(1, len(lines)) if _is_delimiter(lines[i])), None)
    if end is None:
        raise ParseError(source, "frontmatter block opened with '---' but never closed")

    header = ''.join(lines[1:end])
    try:
        fields = yaml.load(header, Loader=FrontmatterLoader) if header.strip() else {}
    except (yaml.YAMLError, ValueError) as e:
        raise ParseError(source, f"invalid YAML frontmatter: {e}") from e
    if fields is None:
        fields = {}
    if not isinstance(fields, dict):
        raise ParseError(source, f"frontmatter must be a mapping, got {type(fields).__name__}")

    body = ''.join(lines[end + 1:]).lstrip('\r\n')
    return ParsedPost(fields={str(k): v for k, v in fields.items()}, body=body)


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single markdown file."""
    if path.is_file():
        return [path] if path.suffix.lower() in MD_EXTENSIONS else []
    if not path.is_dir():
        return []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in MD_EXTENSIONS)


def read_document(path: Path) -> PostDocument:
    """Read a post file as UTF-8; unreadable files become a ParseError."""
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(str(path), f"cannot read file: {e}") from e
    return PostDocument(source=str(path), text=text)
