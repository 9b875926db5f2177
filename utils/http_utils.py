"""
HTTP Utility module for standardized API requests.
Performs a single JSON request and turns every failure into a typed ProviderError.
No retries: a failed call is reported once and the caller degrades.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, Union

import requests

from utils.logger import setup_logger

logger = setup_logger('http_utils')

RawJson = Union[Dict[str, Any], list]


class ProviderErrorKind(Enum):
    RATE_LIMITED = "rate_limited"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"
    NETWORK = "network"


@dataclass(frozen=True)
class ProviderError:
    """Typed failure produced by the HTTP layer or the provider's error envelope."""
    kind: ProviderErrorKind
    message: str = ""
    cause: Optional[BaseException] = None

    @classmethod
    def rate_limited(cls, message: str) -> "ProviderError":
        return cls(ProviderErrorKind.RATE_LIMITED, message)

    @classmethod
    def malformed(cls, message: str) -> "ProviderError":
        return cls(ProviderErrorKind.MALFORMED, message)

    @classmethod
    def not_found(cls, message: str = "Not found") -> "ProviderError":
        return cls(ProviderErrorKind.NOT_FOUND, message)

    @classmethod
    def network(cls, cause: BaseException) -> "ProviderError":
        return cls(ProviderErrorKind.NETWORK, str(cause), cause)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}" if self.message else self.kind.value


@dataclass(frozen=True)
class HttpResult:
    """Either decoded JSON (`data`) or a ProviderError (`error`)."""
    data: Optional[RawJson] = None
    error: Optional[ProviderError] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def make_request(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    method: str = "GET",
    json_body: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 10,
    source_name: str = "API"
) -> HttpResult:
    """
    Make one HTTP request and decode the JSON body.

    Args:
        url: The full URL to request.
        params: Query parameters dictionary.
        method: "GET" or "POST".
        json_body: JSON payload for POST requests.
        headers: Request headers dictionary.
        timeout: Request timeout in seconds.
        source_name: Name of the data source for logging.

    Returns:
        HttpResult with the decoded JSON, or with a ProviderError:
        NETWORK on transport failure, NOT_FOUND on 404, RATE_LIMITED on 429,
        MALFORMED on any other non-2xx status or an unparsable body.
    """
    try:
        response = requests.request(
            method, url, params=params, json=json_body, headers=headers, timeout=timeout
        )
    except requests.exceptions.RequestException as e:
        logger.warning(f"{source_name} connection error: {e}")
        return HttpResult(error=ProviderError.network(e))

    status = response.status_code
    if status == 404:
        logger.warning(f"{source_name} 404 Not Found")
        return HttpResult(error=ProviderError.not_found(f"{source_name} returned 404"), status_code=status)
    if status == 429:
        logger.warning(f"{source_name} HTTP 429: rate limited")
        return HttpResult(error=ProviderError.rate_limited(f"{source_name} returned 429"), status_code=status)
    if not 200 <= status < 300:
        logger.error(f"{source_name} HTTP error {status}: {response.text[:200]}")
        return HttpResult(error=ProviderError.malformed(f"{source_name} returned HTTP {status}"), status_code=status)

    try:
        return HttpResult(data=response.json(), status_code=status)
    except ValueError as e:
        logger.error(f"{source_name} JSON parsing error: {e}")
        return HttpResult(error=ProviderError.malformed(f"Unparsable JSON body: {e}"), status_code=status)
