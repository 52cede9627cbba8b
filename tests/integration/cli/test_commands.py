"""Integration tests for the CLI commands (ingest -> database -> queries)"""

import json

import pytest
from typer.testing import CliRunner

from mdindex.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def project(tmp_path, monkeypatch):
    """Run each command from tmp_path against a throwaway database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDINDEX_DB_URL", f"sqlite:///{tmp_path}/test.db")
    monkeypatch.delenv("MDINDEX_POSTS_DIR", raising=False)


@pytest.fixture(name="blog")
def blog_fixture(write_post, posts_dir):
    write_post("2024-01-05-laravel-tips.md", title="Laravel Tips", date="2024-01-05", tags=["laravel", "php"])
    write_post("secure-apis.md", title="Secure APIs", date="2024-03-01", tags=["security"], featured=True)
    write_post("radio.md", title="Radio Basics", date="2024-02-10", tags="rf", excerpt="Antennas")
    return posts_dir


def _ingest(*args):
    result = runner.invoke(app, ["ingest", *args])
    return result


def test_ingest_then_list(blog):
    result = _ingest(str(blog))
    assert result.exit_code == 0, result.output
    assert "Ingest ok - 3 created" in result.output

    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("2024-03-01  secure-apis *")
    assert "radio" in lines[1]
    assert "laravel-tips" in lines[2]
    assert "Page 1/1 (3 post(s))" in result.output
    assert lines[-1].startswith("Last ingest: 20")


def test_ingest_defaults_to_posts_dir(blog):
    """With no PATH the configured content/posts directory is used."""
    result = _ingest()
    assert result.exit_code == 0, result.output
    assert "3 created" in result.output


def test_list_pagination(blog):
    _ingest(str(blog))
    result = runner.invoke(app, ["list", "--page", "2", "--page-size", "2"])
    assert result.exit_code == 0
    assert "laravel-tips" in result.output
    assert "Page 2/2" in result.output

    result = runner.invoke(app, ["list", "--page", "9"])
    assert "No posts found." in result.output


def test_show(blog):
    _ingest(str(blog))
    result = runner.invoke(app, ["show", "radio"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["tags"] == ["rf"]
    assert data["excerpt"] == "Antennas"
    assert "body" not in data

    result = runner.invoke(app, ["show", "radio", "--body"])
    assert "body" in json.loads(result.output)


def test_show_missing_slug(blog):
    _ingest(str(blog))
    result = runner.invoke(app, ["show", "nope"])
    assert result.exit_code == 1


def test_tag_featured_and_tags(blog):
    _ingest(str(blog))
    result = runner.invoke(app, ["tag", "rf"])
    assert "radio" in result.output
    assert "secure-apis" not in result.output

    assert "No posts tagged 'go'." in runner.invoke(app, ["tag", "go"]).output

    result = runner.invoke(app, ["featured"])
    assert "secure-apis" in result.output
    assert "radio" not in result.output

    result = runner.invoke(app, ["tags"])
    assert result.output.splitlines() == ["laravel (1)", "php (1)", "rf (1)", "security (1)"]


def test_ingest_reports_rejected_documents(blog, write_post):
    write_post("broken.md", title="Broken", date="not-a-date")
    result = _ingest(str(blog))
    assert result.exit_code == 0, result.output
    assert "Ingest partial" in result.output
    assert "1 rejected" in result.output
    assert "invalid date" in result.output


def test_ingest_failed_batch_exits_1(write_post, posts_dir):
    write_post("bad.md", title="Bad", date="2024-01-01", featured="yes")
    result = _ingest(str(posts_dir))
    assert result.exit_code == 1
    assert "Batch failed" in result.output


def test_ingest_json_report(blog):
    result = _ingest(str(blog), "--json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["counts"]["created"] == 3


def test_ingest_export(blog, tmp_path):
    result = _ingest(str(blog), "--export", "--out-dir", str(tmp_path / "dist"))
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "dist" / "index.json").read_text())
    assert [p["slug"] for p in data["posts"]] == ["secure-apis", "radio", "laravel-tips"]


def test_ingest_missing_path():
    result = _ingest("does-not-exist")
    assert result.exit_code == 1


def test_init_reset(blog):
    _ingest(str(blog))
    result = runner.invoke(app, ["init", "--reset"])
    assert result.exit_code == 0
    assert "Existing data cleared." in result.output
    listing = runner.invoke(app, ["list"]).output
    assert "No posts found." in listing
    assert "Last ingest:" not in listing
