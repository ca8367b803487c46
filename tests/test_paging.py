"""Tests for malclient.paging module."""

from __future__ import annotations

import pytest

from malclient.models import Paging
from malclient.options import Offset
from malclient.paging import apply_paging, paginate, parse_offset
from malclient.transport import MALResponse


def _response() -> MALResponse:
    return MALResponse(status_code=200, reason="OK", method="GET", url="https://api.mal.test/v2/x")


# ---------------------------------------------------------------------------
# parse_offset
# ---------------------------------------------------------------------------


class TestParseOffset:
    """Given paging hint URLs."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://api.myanimelist.net/v2/anime?offset=4&limit=2", 4),
            ("?offset=4", 4),
            ("?limit=2", 0),
            ("", 0),
            ("?offset=foo", 0),
            ("?offset=-3", 0),
        ],
    )
    def test_offsets(self, url: str, expected: int) -> None:
        assert parse_offset(url) == expected

    def test_apply_paging(self) -> None:
        response = _response()
        apply_paging(response, Paging(next="?offset=4", previous="?offset=2"))
        assert response.next_offset == 4
        assert response.prev_offset == 2


# ---------------------------------------------------------------------------
# paginate
# ---------------------------------------------------------------------------


class TestPaginate:
    """Given a list endpoint split into pages of two items."""

    async def test_follows_next_offset_until_zero(self) -> None:
        """When every page announces the next one, all items are yielded in order."""
        items = list(range(5))
        seen: list[int] = []

        async def fetch(offset: Offset) -> tuple[list[int], MALResponse]:
            seen.append(offset.value)
            response = _response()
            start = offset.value
            if start + 2 < len(items):
                response.next_offset = start + 2
            return items[start : start + 2], response

        result = [item async for item in paginate(fetch)]
        assert result == items
        assert seen == [0, 2, 4]

    async def test_stops_when_cursor_does_not_advance(self) -> None:
        calls = 0

        async def fetch(offset: Offset) -> tuple[list[str], MALResponse]:
            nonlocal calls
            calls += 1
            response = _response()
            response.next_offset = offset.value
            return ["x"], response

        result = [item async for item in paginate(fetch, start=3)]
        assert result == ["x"]
        assert calls == 1
