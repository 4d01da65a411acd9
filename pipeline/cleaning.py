"""
Text cleaning for Statistics Netherlands table exports.

An export looks like::

    "Deaths; underlying cause of death (shortlist), sex, age"
    "Topics";"Causes of death";...;"Deceased persons"
    ;;;;;;;"number"
    "Total";"1 Infectious and parasitic diseases";...;2500
    "Total";"1.1 Tuberculosis";...;40
    ...
    "© Statistics Netherlands, Den Haag/Heerlen 11-10-2017"

clean_text() drops the title and header block, switches the delimiter to a
comma and removes tokens that would otherwise leak into labels. The footer is
left in place; pipeline.parsing.trim_footer() cuts it at the row level, where
quoting is already resolved.
"""

from __future__ import annotations

import logging

from pipeline.errors import AnchorNotFoundError
from utils.config import DEFAULT_ANCHOR
from utils.patterns import FIELD_DELIMITER, SECTION_CODE, noise_word_pattern

logger = logging.getLogger(__name__)


def strip_preamble(raw: str, anchor: str = DEFAULT_ANCHOR) -> str:
    """Return raw starting at the beginning of the line containing anchor.

    Raises:
        AnchorNotFoundError: anchor does not occur in raw
    """
    idx = raw.find(anchor)
    if idx < 0:
        raise AnchorNotFoundError(anchor)
    line_start = raw.rfind("\n", 0, idx) + 1
    if line_start:
        logger.debug("Dropped %d header line(s) before anchor", raw.count("\n", 0, line_start))
    return raw[line_start:]


def clean_text(raw: str, anchor: str = DEFAULT_ANCHOR, noise_word: str = "number") -> str:
    """Reduce a raw export to its data rows (plus footer).

    Steps, in order:
      1. Discard everything before the anchor row.
      2. Remove the noise word (whole-word matches only).
      3. Replace ';' delimiters with ','.
      4. Remove section codes such as "1.4 " in front of labels.
      5. Trim surrounding whitespace.

    Args:
        raw: Full decoded file text
        anchor: String that occurs in the first data row
        noise_word: Unit word repeated in header rows

    Returns:
        Comma-delimited text whose first line is the anchor row

    Raises:
        AnchorNotFoundError: anchor does not occur in raw
    """
    text = strip_preamble(raw.replace("\r\n", "\n"), anchor)
    text = noise_word_pattern(noise_word).sub("", text)
    text = FIELD_DELIMITER.sub(",", text)
    text = SECTION_CODE.sub("", text)
    return text.strip()
