"""
Pipeline package -- load a statistics export into chart records.

Re-exports key entry points so callers can do::

    from pipeline import load_records, Record
"""

from pipeline.cleaning import clean_text
from pipeline.errors import (
    AmountParseError,
    AnchorNotFoundError,
    ChartDataError,
    DataLoadError,
    NoDataError,
    ParseError,
    RowShapeError,
    SentinelNotFoundError,
)
from pipeline.loader import load_records, read_source, records_from_text
from pipeline.parsing import Record, Row, parse_records, rows_to_records, tokenize_rows, trim_footer
from pipeline.report import LoadReport

__all__ = [
    "clean_text",
    "load_records",
    "read_source",
    "records_from_text",
    "parse_records",
    "rows_to_records",
    "tokenize_rows",
    "trim_footer",
    "Record",
    "Row",
    "LoadReport",
    "ChartDataError",
    "ParseError",
    "AnchorNotFoundError",
    "SentinelNotFoundError",
    "RowShapeError",
    "AmountParseError",
    "NoDataError",
    "DataLoadError",
]
