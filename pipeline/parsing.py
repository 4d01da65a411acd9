"""
Row parsing for cleaned statistics exports.

Three stages, each usable on its own:

    tokenize_rows()    cleaned text      -> [Row(line, fields)]
    trim_footer()      [Row]             -> [Row] up to (excluding) the sentinel row
    rows_to_records()  [Row]             -> [Record(cause, amount, line)]

parse_records() chains them. Every failure raises a typed ParseError with the
offending line and column instead of producing a half-parsed result.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass

from pipeline.errors import (
    AmountParseError,
    NoDataError,
    RowShapeError,
    SentinelNotFoundError,
)
from utils.config import DEFAULT_SENTINEL
from utils.strings import normalize_whitespace, parse_amount

logger = logging.getLogger(__name__)

CAUSE_COLUMN = 1
AMOUNT_COLUMN = 7


@dataclass(frozen=True)
class Row:
    """One tokenized line of the cleaned text."""

    line: int              # 1-based line number in the cleaned text
    fields: tuple[str, ...]

    @property
    def text(self) -> str:
        return ",".join(self.fields)


@dataclass(frozen=True)
class Record:
    """One (cause, amount) pair extracted from the data file."""

    cause: str
    amount: float
    line: int = 0

    def to_dict(self) -> dict:
        return {"cause": self.cause, "amount": self.amount, "line": self.line}


def tokenize_rows(cleaned: str) -> list[Row]:
    """Split cleaned text into rows of fields.

    Uses csv quoting rules, so a quoted label such as
    ``"Diseases of the blood, blood-forming organs"`` stays one field.
    Blank lines are skipped but still counted for line numbers.
    """
    rows: list[Row] = []
    reader = csv.reader(io.StringIO(cleaned))
    for fields in reader:
        if not fields or not any(f.strip() for f in fields):
            continue
        rows.append(Row(line=reader.line_num, fields=tuple(fields)))
    return rows


def find_footer(rows: list[Row], sentinel: str = DEFAULT_SENTINEL) -> int | None:
    """Index of the first row whose text contains sentinel, or None."""
    for i, row in enumerate(rows):
        if sentinel in row.text:
            return i
    return None


def trim_footer(rows: list[Row], sentinel: str = DEFAULT_SENTINEL,
                require_footer: bool = True) -> list[Row]:
    """Truncate rows at the footer sentinel.

    The sentinel row and everything after it are discarded.

    Raises:
        SentinelNotFoundError: no row contains sentinel and require_footer is set
    """
    idx = find_footer(rows, sentinel)
    if idx is None:
        if require_footer:
            raise SentinelNotFoundError(sentinel)
        logger.warning("Footer sentinel %r not found; keeping all %d rows", sentinel, len(rows))
        return list(rows)
    if idx < len(rows) - 1:
        logger.debug("Dropped %d row(s) after footer", len(rows) - idx - 1)
    return list(rows[:idx])


def row_to_record(row: Row, cause_column: int = CAUSE_COLUMN,
                  amount_column: int = AMOUNT_COLUMN) -> Record:
    """Map one row to a Record.

    Raises:
        RowShapeError: the row is too short for the configured columns
        AmountParseError: the amount cell is empty, non-numeric or negative
    """
    needed = max(cause_column, amount_column) + 1
    if len(row.fields) < needed:
        raise RowShapeError(row.line, len(row.fields), needed)
    raw_amount = row.fields[amount_column]
    try:
        amount = parse_amount(raw_amount)
    except ValueError as exc:
        raise AmountParseError(row.line, amount_column, raw_amount, str(exc)) from exc
    return Record(
        cause=normalize_whitespace(row.fields[cause_column]),
        amount=amount,
        line=row.line,
    )


def rows_to_records(rows: list[Row], cause_column: int = CAUSE_COLUMN,
                    amount_column: int = AMOUNT_COLUMN) -> list[Record]:
    """Map every row to a Record, preserving order.

    Raises:
        NoDataError: rows is empty
        RowShapeError, AmountParseError: see row_to_record()
    """
    if not rows:
        raise NoDataError()
    return [row_to_record(r, cause_column, amount_column) for r in rows]


def parse_records(cleaned: str, sentinel: str = DEFAULT_SENTINEL,
                  cause_column: int = CAUSE_COLUMN, amount_column: int = AMOUNT_COLUMN,
                  require_footer: bool = True) -> list[Record]:
    """Tokenize cleaned text, drop the footer and build records."""
    rows = trim_footer(tokenize_rows(cleaned), sentinel, require_footer)
    return rows_to_records(rows, cause_column, amount_column)
