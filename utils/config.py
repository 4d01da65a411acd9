"""Configuration classes for the causes-of-death chart.

Groups the knobs of each pipeline stage into small Config subclasses:

    ParseConfig  - anchor/sentinel strings, column indices, encoding
    ChartConfig  - canvas size, margins, band padding, animation timing
    AppConfig    - web app settings, loaded from environment variables

Every class serialises to and from plain dicts / JSON so a chart setup can be
saved next to the data file it was built for.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

# First data row of the Statistics Netherlands export; everything above it is
# table title, column headers and unit rows.
DEFAULT_ANCHOR = "1 Infectious and parasitic diseases"

# Copyright footer that follows the last data row. The leading "©" is left
# out because it arrives mangled depending on the export's encoding.
DEFAULT_SENTINEL = "Statistics Netherlands, Den Haag/Heerlen"

DEFAULT_ENCODING = "iso-8859-1"


class Config:
    """Base configuration class for organizing application settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Unknown keys are rejected so a typo in a saved file does not silently
        fall back to a default.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance with values from dictionary

        Raises:
            ValueError: If data contains a key the config does not define
        """
        config = cls()
        known = config.to_dict()
        for key, value in data.items():
            if key not in known:
                raise ValueError(f"{cls.__name__}: unknown setting '{key}'")
            setattr(config, key, value)
        return config

    def save_json(self, path: Path) -> None:
        """Save configuration to JSON file.

        Args:
            path: Path to save configuration file
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load_json(cls, path: Path) -> "Config":
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


class ParseConfig(Config):
    """Where the data lives inside the raw export and how to read it."""

    def __init__(self):
        super().__init__()
        self.anchor = DEFAULT_ANCHOR
        self.sentinel = DEFAULT_SENTINEL
        self.noise_word = "number"
        self.cause_column = 1
        self.amount_column = 7
        self.require_footer = True
        self.encoding = DEFAULT_ENCODING


class ChartConfig(Config):
    """Canvas geometry and animation timing for the bar chart."""

    def __init__(self):
        super().__init__()
        self.width = 960
        self.height = 500
        self.margin = {"top": 20, "right": 20, "bottom": 30, "left": 40}
        self.padding = 0.1
        self.y_tick_count = 10
        self.delay_step_ms = 50
        self.duration_ms = 250

    @property
    def inner_width(self) -> int:
        return self.width - self.margin["left"] - self.margin["right"]

    @property
    def inner_height(self) -> int:
        return self.height - self.margin["top"] - self.margin["bottom"]

    def validate(self) -> None:
        """Raise ValueError if the plot area would be empty or padding is out of range."""
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Chart {self.width}x{self.height} leaves no room inside margins {self.margin}"
            )
        if not 0 <= self.padding <= 1:
            raise ValueError(f"Band padding must be within [0, 1], got {self.padding}")
        if self.delay_step_ms < 0 or self.duration_ms < 0:
            raise ValueError("Animation timings must be non-negative")


def parse_margin(raw: str) -> Dict[str, int]:
    """Parse a CSS-style "top,right,bottom,left" margin string.

    Examples:
        parse_margin("20,20,30,40") -> {"top": 20, "right": 20, "bottom": 30, "left": 40}
        parse_margin("10") -> all four sides 10
    """
    parts = [int(p) for p in raw.replace(" ", "").split(",") if p]
    if len(parts) == 1:
        parts = parts * 4
    if len(parts) != 4:
        raise ValueError(f"Margin needs 1 or 4 comma-separated integers, got '{raw}'")
    return dict(zip(("top", "right", "bottom", "left"), parts))


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box without any configuration.

    Environment variables:
        APP_DATA_SOURCE: Path or http(s) URL of the export (default: data.csv)
        APP_DATA_ENCODING: Text encoding of the export (default: iso-8859-1)
        APP_PORT: Server port (default: 8000)
        APP_HOST: Server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format: "text" or "json" (default: text)
        APP_FETCH_TIMEOUT: Seconds to wait for a remote export (default: 30)
        CHART_WIDTH / CHART_HEIGHT: Canvas size in pixels (default: 960x500)
        CHART_MARGIN: "top,right,bottom,left" (default: 20,20,30,40)
        CHART_ANCHOR: String marking the first data row
        CHART_SENTINEL: String marking the footer row
        CHART_DELAY_MS: Per-rank transition delay (default: 50)
        CHART_DURATION_MS: Transition duration (default: 250)
    """

    def __init__(self) -> None:
        super().__init__()
        self.data_source = os.getenv("APP_DATA_SOURCE", "data.csv")
        self.api_port = int(os.getenv("APP_PORT", "8000"))
        self.api_host = os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = os.getenv("APP_LOG_FORMAT", "text")
        self.fetch_timeout = float(os.getenv("APP_FETCH_TIMEOUT", "30"))

        self._parse = ParseConfig()
        self._parse.encoding = os.getenv("APP_DATA_ENCODING", DEFAULT_ENCODING)
        self._parse.anchor = os.getenv("CHART_ANCHOR", DEFAULT_ANCHOR)
        self._parse.sentinel = os.getenv("CHART_SENTINEL", DEFAULT_SENTINEL)

        self._chart = ChartConfig()
        self._chart.width = int(os.getenv("CHART_WIDTH", str(self._chart.width)))
        self._chart.height = int(os.getenv("CHART_HEIGHT", str(self._chart.height)))
        raw_margin = os.getenv("CHART_MARGIN")
        if raw_margin:
            self._chart.margin = parse_margin(raw_margin)
        self._chart.delay_step_ms = int(os.getenv("CHART_DELAY_MS", "50"))
        self._chart.duration_ms = int(os.getenv("CHART_DURATION_MS", "250"))

    @property
    def parse(self) -> ParseConfig:
        return self._parse

    @property
    def chart(self) -> ChartConfig:
        return self._chart

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
