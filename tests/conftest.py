"""
Pytest fixtures for the causes-of-death chart tests.

Provides a small Statistics Netherlands style export (title, header and unit
rows, five data rows, copyright footer), the same export written to disk in
ISO-8859-1, and the records parsed from it.

File order of the sample rows, with amounts:

    line  cause (after cleaning)                              amount
    1     1 Infectious and parasitic diseases                   2500
    2     Tuberculosis                      ("1.1 " stripped)     40
    3     2 Neoplasms                                          46000
    4     3 Diseases of the blood, blood-forming organs          390
    5     10 Diseases of the circulatory system                37000
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from chart.state import ChartState  # noqa: E402
from pipeline.loader import records_from_text  # noqa: E402
from utils.config import ChartConfig  # noqa: E402

_COLUMNS = '"Men and women";"Total all ages";"Total";"The Netherlands";"2016"'

SAMPLE_EXPORT = (
    '"Deaths; underlying cause of death (shortlist), sex, age"\n'
    '"Topics";"Causes of death";"Sex";"Age";"Marital status";"Region";"Periods";"Deceased persons"\n'
    '"";"";"";"";"";"";"";"number"\n'
    f'"Total";"1 Infectious and parasitic diseases";{_COLUMNS};"2500"\n'
    f'"Total";"1.1 Tuberculosis";{_COLUMNS};"40"\n'
    f'"Total";"2 Neoplasms";{_COLUMNS};"46000"\n'
    f'"Total";"3 Diseases of the blood, blood-forming organs";{_COLUMNS};"390"\n'
    f'"Total";"10 Diseases of the circulatory system";{_COLUMNS};"37000"\n'
    '\n'
    '"© Statistics Netherlands, Den Haag/Heerlen 11-10-2017"\n'
)

FILE_ORDER = [
    "1 Infectious and parasitic diseases",
    "Tuberculosis",
    "2 Neoplasms",
    "3 Diseases of the blood, blood-forming organs",
    "10 Diseases of the circulatory system",
]

CAUSE_ORDER = [
    "1 Infectious and parasitic diseases",
    "10 Diseases of the circulatory system",
    "2 Neoplasms",
    "3 Diseases of the blood, blood-forming organs",
    "Tuberculosis",
]

AMOUNT_ORDER = [
    "2 Neoplasms",
    "10 Diseases of the circulatory system",
    "1 Infectious and parasitic diseases",
    "3 Diseases of the blood, blood-forming organs",
    "Tuberculosis",
]


@pytest.fixture()
def file_order() -> list[str]:
    return list(FILE_ORDER)


@pytest.fixture()
def cause_order() -> list[str]:
    return list(CAUSE_ORDER)


@pytest.fixture()
def amount_order() -> list[str]:
    return list(AMOUNT_ORDER)


@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_EXPORT


@pytest.fixture()
def sample_path(tmp_path) -> Path:
    """The sample export on disk, encoded the way the publisher ships it."""
    path = tmp_path / "data.csv"
    path.write_bytes(SAMPLE_EXPORT.encode("iso-8859-1"))
    return path


@pytest.fixture()
def sample_records():
    return records_from_text(SAMPLE_EXPORT)


@pytest.fixture()
def chart_state(sample_records) -> ChartState:
    """Fresh state with the default 960x500 canvas (plot area 900x450)."""
    return ChartState(sample_records, ChartConfig())
