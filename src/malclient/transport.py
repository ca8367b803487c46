"""Transport executor: performs a request and classifies the outcome."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import structlog
from pydantic import ValidationError

from malclient.constants import APIFamily
from malclient.exceptions import (
    APIError,
    HTTPStatusError,
    NoContentError,
    TransportError,
)
from malclient.models import ErrorPayload

log: structlog.stdlib.BoundLogger = structlog.get_logger()


@dataclass
class MALResponse:
    """The library's view of an HTTP response.

    It is returned (or attached to the raised error) for every call that got
    an answer from the server. ``body`` always holds the bytes exactly as they
    were received. ``next_offset`` and ``prev_offset`` are filled in by list
    endpoints; 0 means there is no such page.
    """

    status_code: int
    reason: str
    method: str
    url: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes = b""
    next_offset: int = 0
    prev_offset: int = 0

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> MALResponse:
        """Build from a fully read httpx response."""
        return cls(
            status_code=response.status_code,
            reason=response.reason_phrase,
            method=response.request.method,
            url=str(response.request.url),
            headers=response.headers,
            body=response.content,
        )

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299


def parse_error_payload(body: bytes) -> ErrorPayload:
    """Parse a modern error document, falling back to an empty payload."""
    if not body:
        return ErrorPayload()
    try:
        return ErrorPayload.model_validate_json(body)
    except ValidationError:
        return ErrorPayload()


def check_response(response: MALResponse, family: APIFamily) -> None:
    """Raise the error matching the response status, if any.

    Raises:
        NoContentError: On exactly 204.
        APIError: On non-2xx from a modern endpoint.
        HTTPStatusError: On non-2xx from a legacy endpoint.
    """
    if response.status_code == 204:
        raise NoContentError(response)

    if response.is_success:
        return

    if family is APIFamily.MODERN:
        payload = parse_error_payload(response.body)
        log.warning(
            "api error",
            status=response.status_code,
            url=response.url,
            error=payload.error,
            message=payload.message,
        )
        raise APIError(response, payload)

    log.warning("http status error", status=response.status_code, url=response.url)
    raise HTTPStatusError(response)


async def execute(
    http: httpx.AsyncClient,
    request: httpx.Request,
    family: APIFamily,
) -> MALResponse:
    """Send *request* through *http* and return the wrapped response.

    The whole body is read into memory and the underlying httpx response is
    closed before this returns.

    Raises:
        TransportError: When no response was received.
        NoContentError, APIError, HTTPStatusError: See :func:`check_response`.
    """
    log.debug("sending request", method=request.method, url=str(request.url), family=str(family))

    try:
        raw = await http.send(request)
    except httpx.TimeoutException as exc:
        raise TransportError(f"{request.method} {request.url}: timed out") from exc
    except httpx.RequestError as exc:
        raise TransportError(f"{request.method} {request.url}: {exc}") from exc

    response = MALResponse.from_httpx(raw)
    log.debug("received response", status=response.status_code, size=len(response.body))

    check_response(response, family)
    return response
