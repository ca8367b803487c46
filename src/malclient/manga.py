"""Manga endpoints: legacy search and list writes, v2 catalogue and list status."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from malclient.constants import APIFamily, APIPath, LegacyPath
from malclient.exceptions import SoftError
from malclient.models import Manga, MangaList, MangaListStatus, MangaResult
from malclient.options import Capability, Query, check_options

if TYPE_CHECKING:
    import anyio

    from malclient.client import MALClient
    from malclient.entries import MangaEntry
    from malclient.options import MangaRanking, Option
    from malclient.transport import MALResponse

log: structlog.stdlib.BoundLogger = structlog.get_logger()

DETAILS_OPTIONS = frozenset({Capability.FIELDS})
FIND_OPTIONS = frozenset({Capability.SEARCH, Capability.PAGING, Capability.FIELDS})
RANKING_OPTIONS = frozenset({Capability.RANKING, Capability.PAGING, Capability.FIELDS})
UPDATE_OPTIONS = frozenset({Capability.UPDATE_MANGA})


class MangaService:
    """Manga endpoints of both API generations."""

    def __init__(self, client: MALClient) -> None:
        self._client = client

    # --- Legacy API ---

    async def search(
        self, query: str, *, scope: anyio.CancelScope | None = None
    ) -> tuple[MangaResult, MALResponse]:
        """Search the manga catalogue (legacy, Basic auth).

        Raises:
            NoContentError: Nothing matched the query.
        """
        return await self._client.fetch_xml(
            LegacyPath.MANGA_SEARCH, MangaResult, params={"q": query}, scope=scope
        )

    async def user_list(
        self, username: str, *, scope: anyio.CancelScope | None = None
    ) -> tuple[MangaList, MALResponse]:
        """Fetch the full manga list of *username* from ``malappinfo.php``.

        Raises:
            SoftError: The document reports an error; see ``result``.
        """
        params = {"status": "all", "type": "manga", "u": username}
        result, response = await self._client.fetch_xml(
            LegacyPath.LIST, MangaList, params=params, scope=scope
        )
        if result.error:
            log.warning("soft error", url=response.url, error=result.error)
            raise SoftError(response, result, result.error)
        return result, response

    async def add(
        self, manga_id: int, entry: MangaEntry, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        """Add a manga to the authenticated user's list."""
        path = LegacyPath.MANGA_ADD.format(id=manga_id)
        return await self._client.request(APIFamily.LEGACY, "POST", path, entry=entry, scope=scope)

    async def update(
        self, manga_id: int, entry: MangaEntry, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        """Update a manga already on the authenticated user's list."""
        path = LegacyPath.MANGA_UPDATE.format(id=manga_id)
        return await self._client.request(APIFamily.LEGACY, "POST", path, entry=entry, scope=scope)

    async def delete(
        self, manga_id: int, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        """Remove a manga from the authenticated user's list."""
        path = LegacyPath.MANGA_DELETE.format(id=manga_id)
        return await self._client.request(APIFamily.LEGACY, "DELETE", path, scope=scope)

    # --- v2 API ---

    async def details(
        self, manga_id: int, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[Manga, MALResponse]:
        checked = check_options(options, DETAILS_OPTIONS, "Manga.details")
        path = APIPath.MANGA_DETAILS.format(id=manga_id)
        return await self._client.fetch_json(path, Manga, options=checked, scope=scope)

    async def find(
        self, query: str, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[list[Manga], MALResponse]:
        checked = check_options(options, FIND_OPTIONS, "Manga.find")
        return await self._client.fetch_nodes(
            APIPath.MANGA, Manga, options=[Query(query), *checked], scope=scope
        )

    async def ranking(
        self,
        ranking: MangaRanking,
        *options: Option,
        scope: anyio.CancelScope | None = None,
    ) -> tuple[list[Manga], MALResponse]:
        checked = check_options([ranking, *options], RANKING_OPTIONS, "Manga.ranking")
        return await self._client.fetch_nodes(
            APIPath.MANGA_RANKING, Manga, options=checked, scope=scope
        )

    async def update_my_list_status(
        self, manga_id: int, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[MangaListStatus, MALResponse]:
        """Add or update a manga on the authenticated user's list.

        Accepts ``MangaStatus``, ``Score``, ``NumVolumesRead``,
        ``NumChaptersRead``, ``IsRereading``, ``NumTimesReread``,
        ``RereadValue``, ``Priority``, ``Tags`` and ``Comments``.
        """
        checked = check_options(options, UPDATE_OPTIONS, "Manga.update_my_list_status")
        path = APIPath.MANGA_MY_LIST_STATUS.format(id=manga_id)
        return await self._client.fetch_json(
            path, MangaListStatus, method="PATCH", options=checked, scope=scope
        )

    async def delete_my_list_item(
        self, manga_id: int, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        path = APIPath.MANGA_MY_LIST_STATUS.format(id=manga_id)
        return await self._client.request(APIFamily.MODERN, "DELETE", path, scope=scope)
