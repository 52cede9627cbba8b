"""Root test configuration — session-level cleanup of runtime artifacts"""

import shutil
from pathlib import Path

import pytest
import yaml


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["mdindex.db", "test.db"]
_CLEANUP_DIRS = ["dist"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files and export directories created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


def render_post(body: str = "Some body text.\n", **fields) -> str:
    """Markdown text with fields dumped as a YAML frontmatter block."""
    header = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n{body}"


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path):
    d = tmp_path / "content" / "posts"
    d.mkdir(parents=True)
    return d


@pytest.fixture(name="write_post")
def write_post_fixture(posts_dir):
    """Factory: write_post('name.md', title=..., date=..., ...) -> Path.

    Pass raw= to write text verbatim instead of rendering frontmatter.
    """
    def _write(name: str, raw: str = None, body: str = "Some body text.\n", **fields) -> Path:
        path = posts_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(raw if raw is not None else render_post(body, **fields), encoding="utf-8")
        return path
    return _write
