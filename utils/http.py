"""HTTP utilities for fetching remote statistics exports.

Provides:
- RetryStrategy: urllib3 retry settings for transient server errors
- SessionManager: a pooled requests.Session with retries mounted
- fetch_text(): GET a URL and decode the body with an explicit encoding
"""

from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry as URLRetry


class RetryStrategy:
    """Defines retry behavior for HTTP requests."""

    def __init__(self, max_retries: int = 3, backoff_factor: float = 0.5,
                 status_forcelist: Optional[List[int]] = None):
        """Initialize retry strategy.

        Args:
            max_retries: Maximum number of retry attempts (default: 3)
            backoff_factor: Exponential backoff multiplier (default: 0.5)
            status_forcelist: HTTP status codes to retry on
                            (default: [429, 500, 502, 503, 504])
        """
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.status_forcelist = status_forcelist or [429, 500, 502, 503, 504]

    def get_retry_object(self) -> URLRetry:
        """Get the urllib3 Retry object for this strategy.

        ``raise_on_status=False`` hands the final error response back to the
        caller so raise_for_status() reports the real status code.
        """
        return URLRetry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=self.status_forcelist,
            allowed_methods=["GET", "HEAD"],
            raise_on_status=False,
        )


class SessionManager:
    """Owns one requests.Session with the retry adapter mounted.

    Usage::

        with SessionManager() as sm:
            text = fetch_text(url, sm)
    """

    def __init__(self, retry_strategy: Optional[RetryStrategy] = None,
                 user_agent: str = "causes-chart/1.0"):
        self.retry_strategy = retry_strategy or RetryStrategy()
        self.user_agent = user_agent
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or lazily create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers["User-Agent"] = self.user_agent
            adapter = HTTPAdapter(max_retries=self.retry_strategy.get_retry_object())
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        return self._session

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def is_url(source) -> bool:
    """True when source looks like an http(s) URL rather than a file path."""
    return str(source).lower().startswith(("http://", "https://"))


def fetch_text(url: str, session_manager: SessionManager,
               encoding: str, timeout: float = 30.0) -> str:
    """GET url and decode the body with ``encoding``.

    The server's declared charset is ignored: statistics exports are often
    served as text/plain without one, and the caller knows the real encoding.

    Raises:
        requests.RequestException: On connection failure or non-2xx status
    """
    response = session_manager.session.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content.decode(encoding)
