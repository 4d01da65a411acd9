"""
Unit tests for pipeline/cleaning.py

Covers anchor location, header removal, delimiter normalisation and removal
of the noise word and section codes. No file or network I/O.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pipeline.cleaning import clean_text, strip_preamble
from pipeline.errors import AnchorNotFoundError, ParseError


ANCHOR = "1 Infectious and parasitic diseases"


# ── strip_preamble ────────────────────────────────────────────────────────────

class TestStripPreamble:
    def test_starts_at_anchor_line(self):
        text = "title\nheader\nX;1 Infectious and parasitic diseases;1\nnext"
        assert strip_preamble(text, ANCHOR) == "X;1 Infectious and parasitic diseases;1\nnext"

    def test_anchor_on_first_line(self):
        text = "1 Infectious and parasitic diseases;1\nnext"
        assert strip_preamble(text, ANCHOR) == text

    def test_missing_anchor_raises(self):
        with pytest.raises(AnchorNotFoundError) as exc_info:
            strip_preamble("title\nno data here\n", ANCHOR)
        assert exc_info.value.anchor == ANCHOR
        assert ANCHOR in str(exc_info.value)

    def test_anchor_error_is_parse_error(self):
        with pytest.raises(ParseError):
            strip_preamble("", ANCHOR)


# ── clean_text ────────────────────────────────────────────────────────────────

class TestCleanText:
    def test_no_header_text_before_anchor(self, sample_text):
        cleaned = clean_text(sample_text)
        assert cleaned.startswith('"Total","1 Infectious and parasitic diseases"')
        assert "Topics" not in cleaned
        assert "underlying cause of death" not in cleaned

    def test_semicolons_become_commas(self, sample_text):
        cleaned = clean_text(sample_text)
        assert ";" not in cleaned
        assert '"Men and women","Total all ages"' in cleaned

    def test_section_codes_removed(self, sample_text):
        cleaned = clean_text(sample_text)
        assert "1.1 " not in cleaned
        assert '"Tuberculosis"' in cleaned

    def test_top_level_codes_kept(self, sample_text):
        cleaned = clean_text(sample_text)
        assert '"2 Neoplasms"' in cleaned

    def test_noise_word_removed(self):
        raw = "1 Infectious and parasitic diseases;number;5"
        assert clean_text(raw) == "1 Infectious and parasitic diseases,,5"

    def test_noise_word_whole_word_only(self):
        raw = "1 Infectious and parasitic diseases;numbers;5"
        assert "numbers" in clean_text(raw)

    def test_custom_noise_word(self):
        raw = "1 Infectious and parasitic diseases;aantal;5"
        assert clean_text(raw, noise_word="aantal") == "1 Infectious and parasitic diseases,,5"

    def test_multi_digit_section_code(self):
        raw = "1 Infectious and parasitic diseases;1\nX;10.2 Stroke;7"
        assert clean_text(raw).endswith("X,Stroke,7")

    def test_footer_left_for_row_trimmer(self, sample_text):
        assert "Statistics Netherlands" in clean_text(sample_text)

    def test_crlf_normalised(self):
        raw = "title\r\n1 Infectious and parasitic diseases;1\r\nX;2 Neoplasms;2\r\n"
        assert clean_text(raw) == "1 Infectious and parasitic diseases,1\nX,2 Neoplasms,2"

    def test_surrounding_whitespace_trimmed(self):
        raw = "1 Infectious and parasitic diseases;1\n\n\n"
        assert clean_text(raw) == "1 Infectious and parasitic diseases,1"

    def test_custom_anchor(self):
        raw = "preamble\nStart;A;1\nB;2"
        assert clean_text(raw, anchor="Start") == "Start,A,1\nB,2"

    def test_missing_anchor(self, sample_text):
        with pytest.raises(AnchorNotFoundError):
            clean_text(sample_text, anchor="99 Not in the file")
