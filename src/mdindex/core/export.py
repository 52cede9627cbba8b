"""Export the index as a JSON document for an external rendering layer"""

import json
from pathlib import Path
from typing import Any

from mdindex.core.index import PostIndex


INDEX_FILE = "index.json"


def build_index_json(index: PostIndex) -> dict[str, Any]:
    """Posts (metadata only, newest first), tag buckets, and featured slugs."""
    snapshot = index.snapshot()
    return {
        "posts": [r.metadata() for r in index.by_date()],
        "tags": {tag: list(slugs) for tag, slugs in snapshot.by_tag.items()},
        "featured": list(snapshot.featured),
    }


def write_index(index: PostIndex, output_dir: Path) -> Path:
    """Write index.json under output_dir; identical indexes give identical bytes."""
    output_dir.mkdir(parents=True, exist_ok=True)
    out = output_dir / INDEX_FILE
    out.write_text(json.dumps(build_index_json(index), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return out
