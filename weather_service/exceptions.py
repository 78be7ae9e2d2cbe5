"""Exception hierarchy for the weather service.

Upstream clients raise subclasses of :class:`UpstreamError`, the store raises
:class:`PersistenceError` or :class:`NotFoundError`. Callers catch the
narrowest class they can act on.
"""

from typing import Optional


class WeatherServiceError(Exception):
    """Base exception for all weather service errors."""


class UpstreamError(WeatherServiceError):
    """Failure talking to an external HTTP API."""

    def __init__(self, message: str, *, url: str = ""):
        self.url = url
        super().__init__(message)


class NetworkError(UpstreamError):
    """Transport failure (connection refused, DNS, timeout)."""


class BadStatusError(UpstreamError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, status_code: int, *, url: str = ""):
        self.status_code = status_code
        super().__init__(f"status code {status_code}", url=url)


class DecodeError(UpstreamError):
    """Response body is not valid JSON or has an unexpected shape."""


class EmptyResultError(UpstreamError):
    """Upstream returned zero results where one was expected."""

    def __init__(self, city: str, *, url: str = ""):
        self.city = city
        super().__init__(f"no geocoding results for {city!r}", url=url)


class ParseError(WeatherServiceError):
    """Timestamp string does not match the expected format."""

    def __init__(self, value: str, expected: Optional[str] = None):
        self.value = value
        self.expected = expected
        message = f"cannot parse timestamp {value!r}"
        if expected:
            message += f" (expected {expected})"
        super().__init__(message)


class PersistenceError(WeatherServiceError):
    """Storage layer failure."""


class WriteNotConfirmedError(PersistenceError):
    """Write statement reported zero affected rows."""


class NotFoundError(WeatherServiceError):
    """No reading stored for the requested city."""

    def __init__(self, city: str):
        self.city = city
        super().__init__(f"no weather data for city {city!r}")
