"""
Crate name availability checker.

Looks a name up on the crates.io API with a single bounded GET request and
classifies the response:

    200 -> UNAVAILABLE (the crate exists)
    404 -> AVAILABLE   (no crate by that name)
    any other status, timeout or transport failure -> UNKNOWN
"""

import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from urllib.parse import quote

import httpx

from . import config

logger = logging.getLogger(__name__)

CRATES_API_PATH = "/api/v1/crates/"


class Availability(Enum):
    """The availability status of a crate name."""

    AVAILABLE = "available"  # 404 - free to publish
    UNAVAILABLE = "unavailable"  # 200 - already taken
    UNKNOWN = "unknown"  # anything else - can't be resolved

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def __str__(self) -> str:
        return self.label


class CheckError(Exception):
    """Base class for errors raised before a lookup is attempted."""


class EmptyNameError(CheckError, ValueError):
    """The crate name was empty."""


class InvalidNameError(CheckError, ValueError):
    """The crate name can't be sent as a URL path segment."""


class InvalidTimeoutError(CheckError, ValueError):
    """The timeout was negative, infinite, NaN or not a duration."""


@dataclass(frozen=True)
class CheckResult:
    """Result of a crate name check, with the reason for an UNKNOWN outcome."""

    name: str
    availability: Availability
    url: str
    status_code: int | None = None
    error_type: str | None = None  # "http_status", "timeout", "network"
    error_message: str | None = None

    @property
    def available(self) -> bool:
        """True only if the name is confirmed available."""
        return self.availability == Availability.AVAILABLE

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "availability": self.availability.value,
            "available": self.available,
            "status_code": self.status_code,
            "url": self.url,
        }
        if self.error_type:
            data["error_type"] = self.error_type
            data["error"] = self.error_message
        return data


def encode_path_segment(name: str) -> str:
    """
    Percent-encode a name as a single URL path segment.

    Every reserved character is encoded, so "a/b?c" becomes "a%2Fb%3Fc" and
    cannot change the path or add a query string.
    """
    return quote(name, safe="")


def crate_url(name: str, registry_url: str | None = None) -> str:
    """Build the API lookup URL for a crate name."""
    base = (registry_url or config.get_registry_url()).rstrip("/")
    return f"{base}{CRATES_API_PATH}{encode_path_segment(name)}"


def _validate_name(name: str | None) -> str:
    if not name:
        logger.error("Crate name can't be empty")
        raise EmptyNameError("Crate name can't be empty")

    # Lone surrogates (e.g. from undecodable argv bytes) can't be percent-encoded
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        logger.error("Crate name %r is not valid UTF-8", name)
        raise InvalidNameError(f"Crate name {name!r} is not valid UTF-8") from None
    return name


def _timeout_seconds(timeout: float | timedelta | None) -> float:
    """Resolve a timeout to seconds, using the configured default for None."""
    if timeout is None:
        return config.get_default_timeout()

    if isinstance(timeout, timedelta):
        seconds = timeout.total_seconds()
    else:
        try:
            seconds = float(timeout)
        except (TypeError, ValueError):
            raise InvalidTimeoutError(f"Invalid timeout: {timeout!r}") from None

    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidTimeoutError(
            f"Timeout must be a finite, non-negative number of seconds, got {seconds}"
        )
    return seconds


def classify_status(status_code: int) -> Availability:
    """Map an HTTP status code from the crates API to an Availability."""
    if status_code == 200:
        return Availability.UNAVAILABLE
    if status_code == 404:
        return Availability.AVAILABLE
    return Availability.UNKNOWN


def check_crate(
    name: str,
    timeout: float | timedelta | None = None,
    *,
    registry_url: str | None = None,
    client: httpx.Client | None = None,
) -> CheckResult:
    """
    Check a crate name and return the full result.

    Args:
        name: Crate name to check. Must be non-empty.
        timeout: Seconds (or a timedelta) before giving up. Defaults to the
                 configured default timeout (5 seconds).
        registry_url: Registry base URL (default: https://crates.io)
        client: Optional httpx.Client to send the request with

    Returns:
        CheckResult. Timeouts and transport failures are reported as UNKNOWN.

    Raises:
        EmptyNameError: name is empty. No request is made.
        InvalidTimeoutError: timeout is negative.
    """
    name = _validate_name(name)
    seconds = _timeout_seconds(timeout)
    url = crate_url(name, registry_url)

    try:
        if client is not None:
            response = client.get(url, timeout=seconds)
        else:
            response = httpx.get(url, timeout=seconds)
    except httpx.TimeoutException:
        logger.warning("Timed out after %ss checking %r", seconds, name)
        return CheckResult(
            name=name,
            availability=Availability.UNKNOWN,
            url=url,
            error_type="timeout",
            error_message=f"Request timed out after {seconds:g}s",
        )
    except httpx.HTTPError as e:
        logger.warning("Request failed checking %r: %s", name, e)
        return CheckResult(
            name=name,
            availability=Availability.UNKNOWN,
            url=url,
            error_type="network",
            error_message=str(e)[:100] or type(e).__name__,
        )

    availability = classify_status(response.status_code)
    logger.debug("%s -> HTTP %d (%s)", url, response.status_code, availability.value)

    if availability == Availability.UNKNOWN:
        return CheckResult(
            name=name,
            availability=availability,
            url=url,
            status_code=response.status_code,
            error_type="http_status",
            error_message=f"Registry status {response.status_code}",
        )

    return CheckResult(
        name=name,
        availability=availability,
        url=url,
        status_code=response.status_code,
    )


def check_availability(
    name: str,
    *,
    registry_url: str | None = None,
    client: httpx.Client | None = None,
) -> Availability:
    """
    Check the availability of a crate name using the default timeout.

    Returns:
        Availability. Raises EmptyNameError for an empty name.
    """
    return check_crate(name, registry_url=registry_url, client=client).availability


def check_availability_with_timeout(
    name: str,
    timeout: float | timedelta,
    *,
    registry_url: str | None = None,
    client: httpx.Client | None = None,
) -> Availability:
    """
    Check the availability of a crate name, giving up after `timeout`.

    A request that does not finish in time yields Availability.UNKNOWN.
    """
    if timeout is None:
        raise InvalidTimeoutError("Timeout is required")
    return check_crate(name, timeout, registry_url=registry_url, client=client).availability
