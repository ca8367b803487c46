"""Anime endpoints: legacy search and list writes, v2 catalogue and list status."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from malclient.constants import APIFamily, APIPath, LegacyPath
from malclient.exceptions import SoftError
from malclient.models import Anime, AnimeList, AnimeListStatus, AnimeResult
from malclient.options import Capability, Query, check_options
from malclient.utils import path_segment

if TYPE_CHECKING:
    import anyio

    from malclient.client import MALClient
    from malclient.entries import AnimeEntry
    from malclient.options import AnimeRanking, Option, Season
    from malclient.transport import MALResponse

log: structlog.stdlib.BoundLogger = structlog.get_logger()

DETAILS_OPTIONS = frozenset({Capability.FIELDS})
FIND_OPTIONS = frozenset({Capability.SEARCH, Capability.PAGING, Capability.FIELDS})
RANKING_OPTIONS = frozenset({Capability.RANKING, Capability.PAGING, Capability.FIELDS})
SEASONAL_OPTIONS = frozenset({Capability.SEASONAL, Capability.PAGING, Capability.FIELDS})
SUGGESTED_OPTIONS = frozenset({Capability.PAGING, Capability.FIELDS})
UPDATE_OPTIONS = frozenset({Capability.UPDATE_ANIME})


class AnimeService:
    """Anime endpoints of both API generations."""

    def __init__(self, client: MALClient) -> None:
        self._client = client

    # --- Legacy API ---

    async def search(
        self, query: str, *, scope: anyio.CancelScope | None = None
    ) -> tuple[AnimeResult, MALResponse]:
        """Search the anime catalogue (legacy, Basic auth).

        Raises:
            NoContentError: Nothing matched the query.
        """
        return await self._client.fetch_xml(
            LegacyPath.ANIME_SEARCH, AnimeResult, params={"q": query}, scope=scope
        )

    async def user_list(
        self, username: str, *, scope: anyio.CancelScope | None = None
    ) -> tuple[AnimeList, MALResponse]:
        """Fetch the full anime list of *username* from ``malappinfo.php``.

        Raises:
            SoftError: The document reports an error such as an unknown user.
                The partially populated list is available as ``result``.
        """
        params = {"status": "all", "type": "anime", "u": username}
        result, response = await self._client.fetch_xml(
            LegacyPath.LIST, AnimeList, params=params, scope=scope
        )
        if result.error:
            log.warning("soft error", url=response.url, error=result.error)
            raise SoftError(response, result, result.error)
        return result, response

    async def add(
        self, anime_id: int, entry: AnimeEntry, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        """Add an anime to the authenticated user's list."""
        path = LegacyPath.ANIME_ADD.format(id=anime_id)
        return await self._client.request(APIFamily.LEGACY, "POST", path, entry=entry, scope=scope)

    async def update(
        self, anime_id: int, entry: AnimeEntry, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        """Update an anime already on the authenticated user's list."""
        path = LegacyPath.ANIME_UPDATE.format(id=anime_id)
        return await self._client.request(APIFamily.LEGACY, "POST", path, entry=entry, scope=scope)

    async def delete(
        self, anime_id: int, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        """Remove an anime from the authenticated user's list."""
        path = LegacyPath.ANIME_DELETE.format(id=anime_id)
        return await self._client.request(APIFamily.LEGACY, "DELETE", path, scope=scope)

    # --- v2 API ---

    async def details(
        self, anime_id: int, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[Anime, MALResponse]:
        """Fetch one anime. Accepts ``Fields``."""
        checked = check_options(options, DETAILS_OPTIONS, "Anime.details")
        path = APIPath.ANIME_DETAILS.format(id=anime_id)
        return await self._client.fetch_json(path, Anime, options=checked, scope=scope)

    async def find(
        self, query: str, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[list[Anime], MALResponse]:
        """Search the catalogue by title. Accepts paging and ``Fields``."""
        checked = check_options(options, FIND_OPTIONS, "Anime.find")
        return await self._client.fetch_nodes(
            APIPath.ANIME, Anime, options=[Query(query), *checked], scope=scope
        )

    async def ranking(
        self,
        ranking: AnimeRanking,
        *options: Option,
        scope: anyio.CancelScope | None = None,
    ) -> tuple[list[Anime], MALResponse]:
        """Fetch the anime ranking of the given kind. Accepts paging and ``Fields``."""
        checked = check_options([ranking, *options], RANKING_OPTIONS, "Anime.ranking")
        return await self._client.fetch_nodes(
            APIPath.ANIME_RANKING, Anime, options=checked, scope=scope
        )

    async def seasonal(
        self,
        year: int,
        season: Season,
        *options: Option,
        scope: anyio.CancelScope | None = None,
    ) -> tuple[list[Anime], MALResponse]:
        """Fetch the anime of one season. Accepts ``SortSeasonal``, paging and ``Fields``."""
        checked = check_options(options, SEASONAL_OPTIONS, "Anime.seasonal")
        path = APIPath.ANIME_SEASONAL.format(year=year, season=path_segment(str(season)))
        return await self._client.fetch_nodes(path, Anime, options=checked, scope=scope)

    async def suggested(
        self, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[list[Anime], MALResponse]:
        """Fetch suggestions for the authenticated user. Accepts paging and ``Fields``."""
        checked = check_options(options, SUGGESTED_OPTIONS, "Anime.suggested")
        return await self._client.fetch_nodes(
            APIPath.ANIME_SUGGESTIONS, Anime, options=checked, scope=scope
        )

    async def update_my_list_status(
        self, anime_id: int, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[AnimeListStatus, MALResponse]:
        """Add or update an anime on the authenticated user's list.

        Only the given attributes change. Accepts ``AnimeStatus``, ``Score``,
        ``NumEpisodesWatched``, ``IsRewatching``, ``NumTimesRewatched``,
        ``RewatchValue``, ``Priority``, ``Tags`` and ``Comments``.
        """
        checked = check_options(options, UPDATE_OPTIONS, "Anime.update_my_list_status")
        path = APIPath.ANIME_MY_LIST_STATUS.format(id=anime_id)
        return await self._client.fetch_json(
            path, AnimeListStatus, method="PATCH", options=checked, scope=scope
        )

    async def delete_my_list_item(
        self, anime_id: int, *, scope: anyio.CancelScope | None = None
    ) -> MALResponse:
        """Remove an anime from the authenticated user's list."""
        path = APIPath.ANIME_MY_LIST_STATUS.format(id=anime_id)
        return await self._client.request(APIFamily.MODERN, "DELETE", path, scope=scope)
