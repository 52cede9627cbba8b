"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Iterable, Optional

import typer
from sqlmodel import Session

from mdindex.config import Settings, load_config
from mdindex.core.export import write_index
from mdindex.core.index import PostIndex
from mdindex.core.models import PostRecord
from mdindex.core.pipeline import run_ingest
from mdindex.core.query import Page, PostQuery
from mdindex.core.report import IngestReport
from mdindex.crud.database import init_db, make_engine, reset_db
from mdindex.crud.store import last_indexed_at, load_index, save_index


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return settings


def _query(settings: Settings) -> PostQuery:
    """Load the last saved index from the database."""
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        index = load_index(session)
    return PostQuery(index, page_size=settings.page_size)


def _echo_last_ingest(settings: Settings) -> None:
    engine = make_engine(settings.db_url)
    with Session(engine) as session:
        stamp = last_indexed_at(session)
    if stamp is not None:
        typer.echo(f"Last ingest: {stamp.isoformat(timespec='seconds')}")


def _echo_post(r: PostRecord) -> None:
    flag = " *" if r.featured else ""
    tags = f"  [{', '.join(r.tags)}]" if r.tags else ""
    typer.echo(f"{r.date.isoformat()}  {r.slug}{flag}  {r.title}{tags}")


def _echo_posts(posts: Iterable[PostRecord], empty: str) -> None:
    posts = list(posts)
    if not posts:
        typer.echo(empty)
        return
    for r in posts:
        _echo_post(r)


def _echo_page(page: Page, empty: str) -> None:
    _echo_posts(page, empty)
    if page.total:
        typer.echo(f"Page {page.page}/{page.pages} ({page.total} post(s))")


def _echo_report(report: IngestReport) -> None:
    """Print diagnostics and a summary line."""
    for d in sorted(report.diagnostics, key=lambda d: d.source):
        typer.echo(f"  {d.kind}: {d.source}: {d.message}", err=True)
    c = report.counts
    typer.echo(
        f"Ingest {report.status} - "
        f"{c['created']} created, "
        f"{c['updated']} updated, "
        f"{c['unchanged']} unchanged, "
        f"{c['removed']} removed, "
        f"{c['rejected']} rejected"
    )


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def ingest_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Posts file or directory (default: posts_dir)")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Parallel parse workers")] = None,
    export: Annotated[bool, typer.Option("--export/--no-export", help="Write index.json to the output dir")] = False,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory for index.json")] = None,
    report_json: Annotated[bool, typer.Option("--json", help="Print the ingest report as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Run a full ingest pass, save the index, and report rejected documents."""
    settings = _settings(overrides={"posts_dir": path, "workers": workers, "output_dir": out}, verbose=verbose)
    engine = make_engine(settings.db_url)
    init_db(engine)

    index = PostIndex()
    try:
        report = run_ingest(index, settings.posts_dir, settings.workers, settings.words_per_minute)
    except FileNotFoundError as e:
        _fail(str(e))

    if report_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _echo_report(report)
    if report.failed:
        _fail("Batch failed: no valid posts were ingested")

    try:
        with Session(engine) as session:
            save_index(session, index)
            session.commit()
    except Exception as e:
        _fail("Saving index failed", e)

    if export:
        out_file = write_index(index, Path(settings.output_dir))
        typer.echo(f"Exported {len(index)} post(s) to {out_file}")


def list_cmd(
    page: Annotated[int, typer.Option("--page", help="1-based page number")] = 1,
    page_size: Annotated[Optional[int], typer.Option("--page-size", help="Posts per page")] = None,
    ):
    """List posts newest first."""
    settings = _settings(overrides={"page_size": page_size})
    _echo_page(_query(settings).list_posts(page), "No posts found.")
    _echo_last_ingest(settings)


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug")],
    body: Annotated[bool, typer.Option("--body", help="Include the markdown body")] = False,
    ):
    """Show one post's metadata as JSON."""
    post = _query(_settings()).get_by_slug(slug)
    if post is None:
        _fail(f"No post with slug '{slug}'")
    data = post.model_dump(mode="json") if body else post.metadata()
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def tag_cmd(
    tag: Annotated[str, typer.Argument(help="Tag to filter by (exact match)")],
    page: Annotated[int, typer.Option("--page", help="1-based page number")] = 1,
    page_size: Annotated[Optional[int], typer.Option("--page-size", help="Posts per page")] = None,
    ):
    """List posts carrying a tag, newest first."""
    settings = _settings(overrides={"page_size": page_size})
    _echo_page(_query(settings).filter_by_tag(tag, page), f"No posts tagged '{tag}'.")


def featured_cmd():
    """List featured posts newest first."""
    _echo_posts(_query(_settings()).list_featured(), "No featured posts.")


def tags_cmd():
    """List every tag with its post count."""
    tags = _query(_settings()).list_tags()
    if not tags:
        typer.echo("No tags found.")
        return
    for tag, count in tags:
        typer.echo(f"{tag} ({count})")
