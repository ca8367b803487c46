"""User endpoints of the v2 API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from malclient.constants import APIPath
from malclient.models import User, UserAnime, UserManga
from malclient.options import Capability, check_options
from malclient.utils import path_segment

if TYPE_CHECKING:
    import anyio

    from malclient.client import MALClient
    from malclient.options import Option
    from malclient.transport import MALResponse

MY_INFO_OPTIONS = frozenset({Capability.FIELDS})
ANIME_LIST_OPTIONS = frozenset({Capability.LIST_QUERY_ANIME, Capability.PAGING, Capability.FIELDS})
MANGA_LIST_OPTIONS = frozenset({Capability.LIST_QUERY_MANGA, Capability.PAGING, Capability.FIELDS})


class UserService:
    """Profile and list endpoints of MyAnimeList users."""

    def __init__(self, client: MALClient) -> None:
        self._client = client

    async def my_info(
        self, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[User, MALResponse]:
        """Fetch the profile of the authenticated user.

        ``Fields("anime_statistics")`` adds the list statistics.
        """
        checked = check_options(options, MY_INFO_OPTIONS, "User.my_info")
        return await self._client.fetch_json(APIPath.USER_ME, User, options=checked, scope=scope)

    async def anime_list(
        self, username: str, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[list[UserAnime], MALResponse]:
        """Fetch one page of the anime list of *username* (``@me`` for the caller).

        Accepts ``AnimeStatus``, ``SortAnimeList``, paging and ``Fields``.
        """
        checked = check_options(options, ANIME_LIST_OPTIONS, "User.anime_list")
        path = APIPath.USER_ANIME_LIST.format(name=path_segment(username))
        return await self._client.fetch_page(path, UserAnime, options=checked, scope=scope)

    async def manga_list(
        self, username: str, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[list[UserManga], MALResponse]:
        """Fetch one page of the manga list of *username*.

        Accepts ``MangaStatus``, ``SortMangaList``, paging and ``Fields``.
        """
        checked = check_options(options, MANGA_LIST_OPTIONS, "User.manga_list")
        path = APIPath.USER_MANGA_LIST.format(name=path_segment(username))
        return await self._client.fetch_page(path, UserManga, options=checked, scope=scope)
