"""Tests for malclient.transport module."""

from __future__ import annotations

import httpx
import pytest
import respx

from malclient.constants import APIFamily
from malclient.exceptions import APIError, HTTPStatusError, NoContentError, TransportError
from malclient.transport import MALResponse, execute, parse_error_payload

URL = "https://mal.test/resource"


async def _execute(family: APIFamily = APIFamily.MODERN, method: str = "GET") -> MALResponse:
    async with httpx.AsyncClient() as http:
        return await execute(http, httpx.Request(method, URL), family)


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


class TestSuccess:
    """Given a server answering 2xx."""

    @respx.mock
    async def test_body_is_kept_verbatim(self) -> None:
        """When the response arrives, its exact bytes are exposed."""
        raw = b"<user>\xe2\x80\xa2 &bull;</user>"
        respx.get(URL).mock(return_value=httpx.Response(200, content=raw))
        response = await _execute(APIFamily.LEGACY)
        assert response.body == raw
        assert response.status_code == 200
        assert response.method == "GET"
        assert response.url == URL
        assert response.next_offset == 0

    @respx.mock
    async def test_created_is_success(self) -> None:
        respx.post(URL).mock(return_value=httpx.Response(201, text="Created"))
        response = await _execute(APIFamily.LEGACY, "POST")
        assert response.status_code == 201
        assert response.text == "Created"


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


class TestErrors:
    """Given a server answering with something other than plain success."""

    @respx.mock
    async def test_204_is_no_content(self) -> None:
        """When the server answers 204, NoContentError carries the response for both families."""
        respx.get(URL).mock(return_value=httpx.Response(204))
        for family in (APIFamily.LEGACY, APIFamily.MODERN):
            with pytest.raises(NoContentError) as exc_info:
                await _execute(family)
            assert exc_info.value.response.status_code == 204

    @respx.mock
    async def test_modern_error_payload_is_parsed(self) -> None:
        body = b'{"message":"x","error":"y"}'
        respx.get(URL).mock(return_value=httpx.Response(400, content=body))
        with pytest.raises(APIError) as exc_info:
            await _execute(APIFamily.MODERN)
        assert exc_info.value.payload.message == "x"
        assert exc_info.value.payload.error == "y"
        assert exc_info.value.response.body == body

    @respx.mock
    async def test_modern_error_without_json(self) -> None:
        """When the error body is not JSON, the payload is empty but the body is kept."""
        respx.get(URL).mock(return_value=httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(APIError) as exc_info:
            await _execute(APIFamily.MODERN)
        assert exc_info.value.payload.error == ""
        assert exc_info.value.response.body == b"Bad Gateway"

    @respx.mock
    async def test_legacy_error_is_http_status(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(401, text="Invalid credentials"))
        with pytest.raises(HTTPStatusError) as exc_info:
            await _execute(APIFamily.LEGACY)
        assert exc_info.value.text == "Invalid credentials"
        assert exc_info.value.response.status_code == 401
        assert "401 Invalid credentials" in str(exc_info.value)

    @respx.mock
    async def test_connection_error_is_transport(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ConnectError)
        with pytest.raises(TransportError) as exc_info:
            await _execute()
        assert exc_info.value.cancelled is False

    @respx.mock
    async def test_timeout_is_transport(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ReadTimeout)
        with pytest.raises(TransportError, match="timed out"):
            await _execute()


class TestParseErrorPayload:
    """Given raw error bodies."""

    def test_empty(self) -> None:
        assert parse_error_payload(b"").message == ""

    def test_not_json(self) -> None:
        assert parse_error_payload(b"<html>").error == ""

    def test_partial(self) -> None:
        assert parse_error_payload(b'{"error":"not_found"}').error == "not_found"
