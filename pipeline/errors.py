"""
Typed errors raised while loading and parsing a statistics export.

ParseError subclasses carry the line (1-based, inside the cleaned text) and
column (0-based field index) that failed, when known, so a bad export can be
fixed without bisecting the file.

Hierarchy::

    ChartDataError (ValueError)
        ParseError
            AnchorNotFoundError
            SentinelNotFoundError
            RowShapeError
            AmountParseError
            NoDataError
    DataLoadError (RuntimeError)
"""

from __future__ import annotations


class ChartDataError(ValueError):
    """Base class for problems with the content of a data file."""


class ParseError(ChartDataError):
    """A data file could not be turned into records."""

    def __init__(self, message: str, line: int | None = None,
                 column: int | None = None) -> None:
        self.line = line
        self.column = column
        location = []
        if line is not None:
            location.append(f"line {line}")
        if column is not None:
            location.append(f"column {column}")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class AnchorNotFoundError(ParseError):
    """The string marking the first data row does not occur in the text."""

    def __init__(self, anchor: str) -> None:
        self.anchor = anchor
        super().__init__(f"Anchor {anchor!r} not found; cannot locate the first data row")


class SentinelNotFoundError(ParseError):
    """No row contains the footer sentinel."""

    def __init__(self, sentinel: str) -> None:
        self.sentinel = sentinel
        super().__init__(f"Footer sentinel {sentinel!r} not found; cannot locate the end of data")


class RowShapeError(ParseError):
    """A data row has fewer fields than the configured columns need."""

    def __init__(self, line: int, field_count: int, needed: int) -> None:
        self.field_count = field_count
        self.needed = needed
        super().__init__(
            f"Row has {field_count} fields, expected at least {needed}", line=line
        )


class AmountParseError(ParseError):
    """The amount cell of a data row is not a non-negative number."""

    def __init__(self, line: int, column: int, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid amount {value!r}: {reason}", line=line, column=column)


class NoDataError(ParseError):
    """Cleaning and trimming left no data rows."""

    def __init__(self) -> None:
        super().__init__("No data rows between anchor and footer")


class DataLoadError(RuntimeError):
    """The raw file could not be read or fetched."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load {source}: {reason}")
