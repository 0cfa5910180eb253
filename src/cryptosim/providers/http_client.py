"""HTTP client with connection retries and exponential backoff."""

import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cryptosim.core.exceptions import (
    RateLimitedError,
    UpstreamFailureError,
    InvalidUpstreamDataError,
)

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Thin JSON-over-HTTP client for upstream APIs.

    Connection errors and transient 5xx answers are retried with exponential
    backoff. HTTP 429 is deliberately not retried: it is raised immediately
    as RateLimitedError so the caller can serve cached data instead of
    blocking the request.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        max_retries: int = 2,
        backoff_factor: float = 0.5,
        retry_statuses: tuple = (502, 503, 504),
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for all requests
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            backoff_factor: Multiplier for exponential backoff
            retry_statuses: HTTP status codes that trigger a retry
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.retry_statuses = retry_statuses

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry configuration."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=list(self.retry_statuses),
            allowed_methods=["GET"],
            raise_on_status=False,
            respect_retry_after_header=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "application/json"})

        return session

    def get_json(self, path: str, params: Optional[dict] = None) -> Any:
        """
        Make a GET request and return the decoded JSON body.

        Args:
            path: URL path (appended to base_url)
            params: Query parameters

        Raises:
            RateLimitedError: upstream answered HTTP 429
            UpstreamFailureError: transport error or any other non-2xx status
            InvalidUpstreamDataError: body is not valid JSON
        """
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise UpstreamFailureError(f"Request to {url} failed", details=str(e)) from e

        if response.status_code == 429:
            logger.warning(f"Rate limited (429) by {url}")
            raise RateLimitedError()

        if not response.ok:
            logger.warning(f"Upstream error ({response.status_code}) from {url}")
            raise UpstreamFailureError(
                f"Upstream returned HTTP {response.status_code}",
                details=response.text[:500],
            )

        try:
            return response.json()
        except ValueError as e:
            raise InvalidUpstreamDataError(
                f"Response from {url} is not valid JSON", details=str(e)
            ) from e

    def close(self) -> None:
        self.session.close()
