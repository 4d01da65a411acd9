"""Pre-compiled regex patterns for the causes-of-death chart tools.

All patterns are compiled once at module import so the cleaning and parsing
stages do not recompile them per call.

Usage:
    from utils.patterns import SECTION_CODE, FIELD_DELIMITER

    text = FIELD_DELIMITER.sub(',', text)
"""

import re

# Source files use semicolons between fields; the parser expects commas.
FIELD_DELIMITER = re.compile(r';')

# Cause labels carry sub-chapter codes such as "1.4 " or "10.2 " in front of
# the name. The code and its trailing space are removed.
SECTION_CODE = re.compile(r'\b\d+\.\d+ ')

# Header rows repeat the unit word ("number") in every amount column.
NOISE_WORD = re.compile(r'\bnumber\b')

# Whitespace normalization: multiple spaces/tabs/newlines
WHITESPACE = re.compile(r'\s+')

# Thousands separators written as spaces inside numeric cells ("12 345")
NUMERIC_NOISE = re.compile(r'\s')


def noise_word_pattern(word: str) -> "re.Pattern[str]":
    """Return a whole-word pattern for a configurable noise token."""
    if word == 'number':
        return NOISE_WORD
    return re.compile(r'\b' + re.escape(word) + r'\b')
