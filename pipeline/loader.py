"""
Load pipeline: fetch raw text, clean it, parse records.

    read_source()   path or URL -> decoded text   (DataLoadError on failure)
    load_records()  path or URL -> ([Record], LoadReport)

Fetch failures propagate immediately; there is no partial result and no retry
beyond the HTTP adapter's transport-level retries.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from pipeline.cleaning import clean_text
from pipeline.errors import DataLoadError, ParseError
from pipeline.parsing import Record, rows_to_records, tokenize_rows, trim_footer
from pipeline.report import LoadReport
from utils.config import DEFAULT_ENCODING, ParseConfig
from utils.http import SessionManager, fetch_text, is_url

logger = logging.getLogger(__name__)


def _line_count(text: str) -> int:
    return text.count("\n") + 1 if text else 0


def read_source(source: str | Path, encoding: str = DEFAULT_ENCODING,
                session_manager: SessionManager | None = None,
                timeout: float = 30.0) -> str:
    """Read a local file or fetch an http(s) URL and decode it.

    Args:
        source: File path or URL
        encoding: Text encoding of the export (Statistics Netherlands
            exports are ISO-8859-1)
        session_manager: Reused for URLs; a temporary one is created if None
        timeout: Seconds to wait for a remote server

    Raises:
        DataLoadError: the file is missing/unreadable, the request failed,
            or the bytes do not decode with ``encoding``
    """
    try:
        if is_url(source):
            if session_manager is not None:
                return fetch_text(str(source), session_manager, encoding, timeout)
            with SessionManager() as sm:
                return fetch_text(str(source), sm, encoding, timeout)
        return Path(source).read_bytes().decode(encoding)
    except (OSError, requests.RequestException, UnicodeDecodeError, LookupError) as exc:
        raise DataLoadError(str(source), str(exc) or type(exc).__name__) from exc


def records_from_text(raw: str, config: ParseConfig | None = None,
                      report: LoadReport | None = None) -> list[Record]:
    """Run clean -> tokenize -> trim footer -> map on already-loaded text."""
    config = config or ParseConfig()

    stage = report.add_stage("clean", _line_count(raw)) if report else None
    cleaned = clean_text(raw, anchor=config.anchor, noise_word=config.noise_word)
    if stage:
        stage.items_out = _line_count(cleaned)

    rows = tokenize_rows(cleaned)
    if report:
        report.add_stage("tokenize", _line_count(cleaned)).items_out = len(rows)

    stage = report.add_stage("footer", len(rows)) if report else None
    rows = trim_footer(rows, config.sentinel, config.require_footer)
    if stage:
        stage.items_out = len(rows)

    records = rows_to_records(rows, config.cause_column, config.amount_column)
    if report:
        report.add_stage("records", len(rows)).items_out = len(records)
    return records


def load_records(source: str | Path, config: ParseConfig | None = None,
                 session_manager: SessionManager | None = None,
                 timeout: float = 30.0) -> tuple[list[Record], LoadReport]:
    """Load, clean and parse one export.

    Returns:
        (records in file order, LoadReport)

    Raises:
        DataLoadError: the source could not be read
        ParseError: the text could not be parsed (see pipeline.errors)
    """
    config = config or ParseConfig()
    report = LoadReport(source=str(source))
    try:
        raw = read_source(source, config.encoding, session_manager, timeout)
        records = records_from_text(raw, config, report)
    except (DataLoadError, ParseError) as exc:
        report.fail(exc)
        logger.error("Load failed: %s", report.console_summary())
        raise

    report.finish(records)
    if report.duplicate_causes:
        logger.warning(
            "Duplicate causes share one band: %s", ", ".join(report.duplicate_causes)
        )
    logger.info("Loaded %s", report.console_summary())
    return records, report
