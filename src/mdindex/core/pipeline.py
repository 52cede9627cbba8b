"""Ingest passes: read -> parse -> build each file, then apply the batch to a PostIndex"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Union

from mdindex.core.build import build_record
from mdindex.core.errors import IngestError
from mdindex.core.index import PostIndex
from mdindex.core.models import PostRecord
from mdindex.core.parse import discover_files, read_document, split_frontmatter
from mdindex.core.report import IngestReport


logger = logging.getLogger(__name__)


def load_post(path: Path, words_per_minute: int = 200) -> PostRecord:
    """Read, parse and validate one file. Raises IngestError; touches no shared state."""
    doc = read_document(path)
    parsed = split_frontmatter(doc.text, doc.source)
    return build_record(parsed.fields, parsed.body, doc.source, doc.text, words_per_minute)


def _try_load(path: Path, words_per_minute: int) -> Union[PostRecord, IngestError]:
    logger.debug("loading %s", path)
    try:
        return load_post(path, words_per_minute)
    except IngestError as e:
        return e


def load_posts(files: list[Path], workers: int = 1, words_per_minute: int = 200) -> list[Union[PostRecord, IngestError]]:
    """Load files, optionally on a thread pool; results follow the order of files."""
    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda p: _try_load(p, words_per_minute), files))
    return [_try_load(p, words_per_minute) for p in files]


def run_ingest(
    index: PostIndex,
    path: Union[str, Path],
    workers: int = 1,
    words_per_minute: int = 200,
    ) -> IngestReport:
    """Full pass: rebuild index from every markdown file under path.

    Records are applied in sorted source order so slug collisions resolve
    the same way on every run. Sources are resolved to absolute paths so a
    later ingest_file of the same file matches its record whether it is given
    relative or absolute. Raises FileNotFoundError if path does not exist.
    """
    root = Path(path).resolve()
    if not root.exists():
        raise FileNotFoundError(f"No such file or directory: {root}")

    files = discover_files(root)
    logger.info("ingesting %d file(s) from %s", len(files), root)
    report = IngestReport()
    previous = {r.source: r for r in index.by_date()}

    records = []
    for result in load_posts(files, workers, words_per_minute):
        if isinstance(result, IngestError):
            report.reject(result)
        else:
            records.append(result)
    for collision in index.rebuild(records):
        report.reject(collision)

    current = {r.source: r for r in index.by_date()}
    for source, record in current.items():
        old = previous.get(source)
        report.record('created' if old is None else 'unchanged' if old == record else 'updated')
    for _ in previous.keys() - current.keys():
        report.record('removed')

    logger.info("ingest %s: %s", report.status, report.counts)
    return report


def ingest_file(index: PostIndex, path: Union[str, Path], words_per_minute: int = 200) -> IngestReport:
    """Incremental pass for a single file, identified by its resolved path as in run_ingest.

    A deleted file, or one that no longer validates, loses its previous record.
    """
    path = Path(path).resolve()
    source = str(path)
    report = IngestReport()

    if not path.exists():
        if index.remove_source(source) is not None:
            report.record('removed')
        return report

    try:
        report.record(index.upsert(load_post(path, words_per_minute)))
    except IngestError as e:
        if index.remove_source(source) is not None:
            report.record('removed')
        report.reject(e)
    return report
