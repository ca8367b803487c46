"""Async client tying the request builder, transport and decoder together."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import anyio
import anyio.lowlevel
import httpx
import structlog
from pydantic import BaseModel

from malclient.account import AccountService
from malclient.anime import AnimeService
from malclient.auth import BasicCredentials, TokenSource
from malclient.config import ClientConfig
from malclient.constants import APIFamily
from malclient.decoder import decode_json, decode_xml
from malclient.exceptions import TransportError
from malclient.forum import ForumService
from malclient.manga import MangaService
from malclient.models import Node, Page
from malclient.paging import apply_paging
from malclient.request import RequestBuilder
from malclient.transport import MALResponse, execute
from malclient.user import UserService

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import TracebackType

    from malclient.auth import TokenProvider
    from malclient.entries import LegacyEntry
    from malclient.options import Option

log: structlog.stdlib.BoundLogger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)


class MALClient:
    """Async client for the legacy and v2 MyAnimeList APIs.

    The client holds only configuration after construction and may be shared
    by concurrent tasks. Endpoints are grouped under ``account``, ``anime``,
    ``manga``, ``user`` and ``forum``.

    Every endpoint method accepts ``scope``, a fresh :class:`anyio.CancelScope`
    for that call. Cancelling the scope (or letting its deadline pass) aborts
    the token fetch and the HTTP exchange and raises
    ``TransportError(cancelled=True)``.

    Example:
        >>> async with MALClient(token="...") as mal:
        ...     anime, resp = await mal.anime.details(1, Fields("rank", "mean"))
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
        token_provider: TokenProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration. Uses defaults if None.
            username: Legacy API user; enables Basic auth together with ``password``.
            password: Legacy API password.
            token: Static OAuth2 access token for the v2 API.
            token_provider: Callable (sync or async) returning a current access
                token; called before every v2 request. Mutually exclusive
                with ``token``.
            http_client: Performer to send requests with. It is not closed by
                :meth:`close` when supplied by the caller.
        """
        self.config = config or ClientConfig()

        credentials = None
        if username is not None:
            credentials = BasicCredentials(username, password or "")

        token_source = None
        if token is not None or token_provider is not None:
            token_source = TokenSource(token=token, provider=token_provider)

        self._builder = RequestBuilder(
            base_url=self.config.base_url,
            api_url=self.config.api_url,
            user_agent=self.config.user_agent or None,
            credentials=credentials,
            token_source=token_source,
            client_id=self.config.client_id or None,
        )

        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout))
        if self._owns_http and not self.config.user_agent:
            del self._http.headers["User-Agent"]

        self.account = AccountService(self)
        self.anime = AnimeService(self)
        self.manga = MangaService(self)
        self.user = UserService(self)
        self.forum = ForumService(self)

    async def request(
        self,
        family: APIFamily,
        method: str,
        path: str,
        *,
        options: Sequence[Option] = (),
        params: Mapping[str, str] | None = None,
        entry: LegacyEntry | None = None,
        scope: anyio.CancelScope | None = None,
    ) -> MALResponse:
        """Build, send and classify one request.

        Returns:
            The wrapped response of a 2xx (other than 204) answer.

        Raises:
            RequestConstructionError: The request could not be built.
            TransportError: No response was received, or the call was cancelled.
            ResponseError: A subclass matching the response status.
        """
        if scope is None:
            return await self._send(family, method, path, options, params, entry)

        with scope:
            await anyio.lowlevel.checkpoint_if_cancelled()
            return await self._send(family, method, path, options, params, entry)

        # Only reached when the scope swallowed its own cancellation
        log.debug("request cancelled", method=method, path=path)
        raise TransportError(f"{method} {path}: cancelled", cancelled=True)

    async def _send(
        self,
        family: APIFamily,
        method: str,
        path: str,
        options: Sequence[Option],
        params: Mapping[str, str] | None,
        entry: LegacyEntry | None,
    ) -> MALResponse:
        request = await self._builder.build(
            family,
            method,
            path,
            options=options,
            params=params,
            entry=entry,
            http=self._http,
        )
        return await execute(self._http, request, family)

    async def fetch_xml(
        self,
        path: str,
        model: type[M],
        *,
        params: Mapping[str, str] | None = None,
        scope: anyio.CancelScope | None = None,
    ) -> tuple[M, MALResponse]:
        """GET a legacy endpoint and decode its XML body into *model*."""
        response = await self.request(APIFamily.LEGACY, "GET", path, params=params, scope=scope)
        return decode_xml(response, model), response

    async def fetch_json(
        self,
        path: str,
        model: type[M],
        *,
        method: str = "GET",
        options: Sequence[Option] = (),
        scope: anyio.CancelScope | None = None,
    ) -> tuple[M, MALResponse]:
        """Call a v2 endpoint and decode its JSON body into *model*."""
        response = await self.request(APIFamily.MODERN, method, path, options=options, scope=scope)
        return decode_json(response, model), response

    async def fetch_page(
        self,
        path: str,
        model: type[M],
        *,
        options: Sequence[Option] = (),
        scope: anyio.CancelScope | None = None,
    ) -> tuple[list[M], MALResponse]:
        """GET a v2 list endpoint and decode its ``data`` items into *model*.

        The paging offsets are copied onto the returned response.
        """
        page, response = await self.fetch_json(
            path, Page[list[model]], options=options, scope=scope  # type: ignore[valid-type]
        )
        apply_paging(response, page.paging)
        return page.data, response

    async def fetch_nodes(
        self,
        path: str,
        model: type[M],
        *,
        options: Sequence[Option] = (),
        scope: anyio.CancelScope | None = None,
    ) -> tuple[list[M], MALResponse]:
        """Like :meth:`fetch_page` for catalogue lists, whose items are wrapped in ``node``."""
        items, response = await self.fetch_page(
            path, Node[model], options=options, scope=scope  # type: ignore[valid-type]
        )
        return [item.node for item in items], response

    async def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> MALClient:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context manager and close the client."""
        await self.close()
