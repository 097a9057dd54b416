"""Clean saved article pages (or URLs) and write the results to disk.

Documents are processed strictly one after another: each one is read,
cleaned and written before the next is touched. Progress goes to stderr so
it never mixes with report output on stdout.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import urlparse

from wx_html_cleaner.cleaner import clean
from wx_html_cleaner.config import Settings
from wx_html_cleaner.fetcher import FetchError, fetch_html, is_url
from wx_html_cleaner.models import BatchReport, CleaningResult
from wx_html_cleaner.naming import cleaned_filename

logger = logging.getLogger(__name__)

LINE = "=" * 60


class SourceError(Exception):
    """Raised when a source document cannot be read or is unusable."""


def _out(msg: str = "") -> None:
    """Print a status message to stderr so it doesn't mix with stdout output."""
    print(msg, file=sys.stderr, flush=True)


def _elapsed(t: float) -> str:
    secs = time.time() - t
    if secs < 60:
        return f"{secs:.1f}s"
    return f"{secs / 60:.1f}m"


def source_name(source: str) -> str:
    """Display name of a source: the file name, or the last URL path segment."""
    if is_url(source):
        segment = urlparse(source).path.rstrip("/").rsplit("/", 1)[-1]
        return segment or urlparse(source).netloc
    return Path(source).name


def read_source(source: str, settings: Settings) -> str:
    if is_url(source):
        try:
            text = fetch_html(source, settings)
        except FetchError as exc:
            raise SourceError(str(exc)) from exc
    else:
        path = Path(source)
        if not path.is_file():
            raise SourceError(f"File not found: {source}")
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceError(f"Cannot read {source}: {exc}") from exc
    if not text.strip():
        raise SourceError("HTML file is empty")
    return text


def output_dir_for(source: str, settings: Settings) -> Path:
    if settings.output_dir:
        return Path(settings.output_dir)
    if is_url(source):
        return Path.cwd()
    return Path(source).resolve().parent


def clean_document(source: str, settings: Settings) -> CleaningResult:
    """Clean one file or URL and write ``<title>_clean.html``. Never raises."""
    name = source_name(source)
    try:
        raw = read_source(source, settings)
        cleaned = clean(raw, parser=settings.parser)
        if not cleaned.strip():
            raise SourceError("Cleaned content is empty")

        cleaned_name = cleaned_filename(
            raw, name, suffix=settings.suffix, max_length=settings.title_max_length,
        )
        target_dir = output_dir_for(source, settings)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / cleaned_name
        target.write_text(cleaned, encoding="utf-8")
    except (SourceError, OSError) as exc:
        logger.warning("Failed to clean %s: %s", source, exc)
        return CleaningResult(success=False, original_name=name, error=str(exc))

    logger.info("Cleaned %s -> %s", name, target)
    return CleaningResult(
        success=True,
        original_name=name,
        cleaned_name=cleaned_name,
        output_path=str(target),
    )


def clean_documents(sources: Iterable[str], settings: Settings | None = None) -> BatchReport:
    """Clean every source in order and report per-document outcomes."""
    if settings is None:
        settings = Settings.from_env()

    sources = list(sources)
    report = BatchReport()
    start = time.time()

    _out(LINE)
    _out(f"  Cleaning {len(sources)} HTML document(s)")
    _out(LINE)

    for i, source in enumerate(sources, start=1):
        t0 = time.time()
        _out(f"[{i}/{len(sources)}] {source_name(source)}")
        result = clean_document(source, settings)
        report.results.append(result)
        if result.success:
            _out(f"  ok: {result.original_name} -> {result.cleaned_name} ({_elapsed(t0)})")
        else:
            _out(f"  failed: {result.original_name} - {result.error}")

    _out(LINE)
    _out(f"  Succeeded: {report.succeeded}")
    _out(f"  Failed:    {report.failed}")
    _out(f"  Time:      {_elapsed(start)}")
    _out(LINE)

    if report.failed:
        logger.warning("%d of %d documents failed", report.failed, len(sources))
    else:
        logger.info("Cleaned %d documents", report.succeeded)
    return report
