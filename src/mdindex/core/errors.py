"""Per-document ingest errors collected by the reporter instead of aborting a batch"""


class IngestError(Exception):
    """Base class for a document that cannot enter the index."""
    kind = "ingest"

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class ParseError(IngestError):
    """Frontmatter delimiters or YAML syntax are malformed, or the file is unreadable."""
    kind = "parse"


class ValidationError(IngestError):
    """A required field is missing or a field has the wrong type/format."""
    kind = "validation"


class SlugCollisionError(IngestError):
    """A second source resolved to a slug already owned by another source."""
    kind = "slug_collision"

    def __init__(self, source: str, slug: str, existing_source: str):
        super().__init__(source, f"slug '{slug}' already used by {existing_source}")
        self.slug = slug
        self.existing_source = existing_source
