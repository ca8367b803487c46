"""Paging helpers for the modern list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import httpx

from malclient.options import Offset

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from malclient.models import Paging
    from malclient.transport import MALResponse

T = TypeVar("T")


def parse_offset(url: str) -> int:
    """Extract the ``offset`` query parameter of a paging URL.

    Missing, unparsable or negative values yield 0, which also means there is
    no such page.

    Example:
        >>> parse_offset("https://api.myanimelist.net/v2/anime?offset=4&limit=2")
        4
        >>> parse_offset("?offset=foo")
        0
    """
    if not url:
        return 0
    try:
        raw = httpx.URL(url).params.get("offset")
    except httpx.InvalidURL:
        return 0
    try:
        offset = int(raw) if raw is not None else 0
    except ValueError:
        return 0
    return max(offset, 0)


def apply_paging(response: MALResponse, paging: Paging) -> None:
    """Copy the offsets announced by *paging* onto *response*."""
    response.next_offset = parse_offset(paging.next)
    response.prev_offset = parse_offset(paging.previous)


async def paginate(
    fetch: Callable[[Offset], Awaitable[tuple[list[T], MALResponse]]],
    start: int = 0,
) -> AsyncIterator[T]:
    """Yield every item of a list endpoint, following ``next_offset``.

    *fetch* receives the :class:`Offset` option for the page to load, e.g.::

        async for item in paginate(lambda offset: client.user.anime_list("@me", Limit(100), offset)):
            ...
    """
    offset = start
    while True:
        items, response = await fetch(Offset(offset))
        for item in items:
            yield item
        if response.next_offset <= offset:
            return
        offset = response.next_offset
