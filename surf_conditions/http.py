"""HTTP utilities with timeouts and retries."""

import logging
from typing import Any, Optional

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from surf_conditions.config import (
    USER_AGENT,
    REQUEST_TIMEOUT,
    MAX_RETRIES,
    RETRY_BACKOFF_BASE,
)

logger = logging.getLogger(__name__)

# Status codes worth another attempt (throttling, overloaded upstream)
RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class FetchError(Exception):
    """Error fetching URL."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RetryableStatus(requests.exceptions.RequestException):
    """Response status that should be retried."""
    pass


@retry(
    stop=stop_after_attempt(MAX_RETRIES),
    wait=wait_exponential(multiplier=RETRY_BACKOFF_BASE, min=1, max=30),
    retry=retry_if_exception_type((requests.exceptions.RequestException,)),
    reraise=True,
)
def _request_with_retry(method: str, url: str, **kwargs) -> requests.Response:
    """Issue a request with retry logic."""
    response = requests.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)

    # Retry on throttling and 5xx errors
    if response.status_code in RETRYABLE_STATUS:
        raise RetryableStatus(f"Server error: {response.status_code}", response=response)

    return response


def _default_headers(extra: Optional[dict] = None) -> dict:
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/geo+json,application/json",
    }
    if extra:
        headers.update(extra)
    return headers


def _send(method: str, url: str, **kwargs) -> Any:
    try:
        response = _request_with_retry(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    except requests.exceptions.RequestException as e:
        status = e.response.status_code if e.response is not None else None
        raise FetchError(f"Failed to fetch {url}: {e}", status_code=status) from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable JSON bodies
        raise FetchError(f"Invalid JSON from {url}: {e}") from e


def fetch_json(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> Any:
    """
    Fetch JSON from URL with retries.

    Args:
        url: URL to fetch
        params: Query parameters (may contain API keys, never logged)
        headers: Extra headers merged over the defaults

    Returns:
        Parsed JSON (dict or list)

    Raises:
        FetchError: If fetch or parse fails
    """
    logger.debug(f"Fetching JSON: {url}")
    return _send("GET", url, params=params, headers=_default_headers(headers))


def post_json(
    url: str,
    payload: dict,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> Any:
    """
    POST a JSON body and return the parsed JSON response.

    Raises:
        FetchError: If the request or parse fails
    """
    logger.debug(f"Posting JSON: {url}")
    return _send(
        "POST",
        url,
        json=payload,
        params=params,
        headers=_default_headers({"Content-Type": "application/json", **(headers or {})}),
    )
