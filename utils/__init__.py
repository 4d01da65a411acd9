"""Shared utilities for the causes-of-death chart tools."""

# Pattern definitions
from utils.patterns import (
    FIELD_DELIMITER,
    SECTION_CODE,
    NOISE_WORD,
    WHITESPACE,
    noise_word_pattern,
)

# String utilities
from utils.strings import parse_amount, normalize_whitespace

# Formatting utilities
from utils.formatting import format_amount, si_formatter

# Configuration
from utils.config import AppConfig, ChartConfig, Config, ParseConfig

__all__ = [
    "FIELD_DELIMITER",
    "SECTION_CODE",
    "NOISE_WORD",
    "WHITESPACE",
    "noise_word_pattern",
    "parse_amount",
    "normalize_whitespace",
    "format_amount",
    "si_formatter",
    "AppConfig",
    "ChartConfig",
    "Config",
    "ParseConfig",
]
