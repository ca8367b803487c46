"""Exception hierarchy for the MyAnimeList client library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from malclient.models import ErrorPayload
    from malclient.options import Option
    from malclient.transport import MALResponse


class MALError(Exception):
    """Base exception for all malclient errors."""

    def __init__(self, message: str = "An unexpected malclient error occurred"):
        self.message = message
        super().__init__(message)


# --- Request construction ---


class RequestConstructionError(MALError):
    """The request could not be assembled (bad path, unencodable body, bad option)."""

    def __init__(self, message: str = "Failed to construct request"):
        super().__init__(message)


class UnsupportedOptionError(RequestConstructionError):
    """An option was passed to an operation that does not accept it."""

    def __init__(self, option: Option, operation: str):
        self.option = option
        self.operation = operation
        super().__init__(f"{type(option).__name__} is not supported by {operation}")


# --- Transport ---


class TransportError(MALError):
    """The HTTP exchange itself failed: connection, DNS, timeout or cancellation."""

    def __init__(self, message: str = "A transport error occurred", cancelled: bool = False):
        self.cancelled = cancelled
        super().__init__(message)


# --- Errors carrying a response ---


class ResponseError(MALError):
    """An error raised after a response was received.

    The wrapped response is always attached so the raw body can be inspected.
    """

    def __init__(self, response: MALResponse, message: str | None = None):
        self.response = response
        super().__init__(message or f"{response.method} {response.url}: {response.status_code}")


class NoContentError(ResponseError):
    """The server answered 204 No Content."""

    def __init__(self, response: MALResponse):
        super().__init__(response, "no content")


class HTTPStatusError(ResponseError):
    """A legacy endpoint answered with a non-2xx status."""

    def __init__(self, response: MALResponse):
        self.text = response.text
        super().__init__(
            response,
            f"{response.method} {response.url}: {response.status_code} {self.text}",
        )


class APIError(ResponseError):
    """A modern endpoint answered with a non-2xx status and an error document."""

    def __init__(self, response: MALResponse, payload: ErrorPayload):
        self.payload = payload
        super().__init__(
            response,
            f"{response.method} {response.url}: {response.status_code} "
            f"{payload.message} {payload.error}".rstrip(),
        )


class DecodeError(ResponseError):
    """The response body could not be decoded into the expected type."""

    def __init__(self, response: MALResponse, message: str = "cannot decode response"):
        super().__init__(response, message)


class SoftError(ResponseError):
    """A 2xx response whose document reports an application-level failure.

    ``result`` holds whatever was decoded before the error was noticed.
    """

    def __init__(self, response: MALResponse, result: Any, message: str):
        self.result = result
        super().__init__(response, message)


# --- Configuration ---


class ConfigError(MALError):
    """Configuration errors."""

    def __init__(self, message: str = "Invalid configuration"):
        super().__init__(message)
