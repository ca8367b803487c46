"""Request builder shared by both MyAnimeList API generations.

The only family-specific decisions are where options go (query string or
form body) and which credentials are attached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlencode

import httpx

from malclient.constants import FORM_CONTENT_TYPE, APIFamily
from malclient.exceptions import RequestConstructionError
from malclient.options import collect

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from malclient.auth import BasicCredentials, TokenSource
    from malclient.entries import LegacyEntry
    from malclient.options import Option

# Methods whose options travel in the URL query string
QUERY_METHODS = frozenset({"GET", "DELETE"})


def _as_root(url: str) -> httpx.URL:
    """Parse a base location, making sure its path ends with a slash."""
    try:
        root = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise RequestConstructionError(f"invalid base URL {url!r}: {exc}") from exc
    if not root.is_absolute_url:
        raise RequestConstructionError(f"base URL must be absolute: {url!r}")
    if not root.path.endswith("/"):
        root = root.copy_with(path=root.path + "/")
    return root


class RequestBuilder:
    """Assembles :class:`httpx.Request` objects for a client.

    Instances hold only immutable configuration and can be shared by
    concurrent calls.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_url: str,
        user_agent: str | None = None,
        credentials: BasicCredentials | None = None,
        token_source: TokenSource | None = None,
        client_id: str | None = None,
    ) -> None:
        self._roots = {
            APIFamily.LEGACY: _as_root(base_url),
            APIFamily.MODERN: _as_root(api_url),
        }
        self.user_agent = user_agent
        self._credentials = credentials
        self._token_source = token_source
        self._client_id = client_id

    def root(self, family: APIFamily) -> httpx.URL:
        """Return the base location for *family*."""
        return self._roots[family]

    def resolve(self, family: APIFamily, path: str) -> httpx.URL:
        """Resolve a relative *path* (query included) against the family root."""
        try:
            return self._roots[family].join(path)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise RequestConstructionError(f"cannot resolve path {path!r}: {exc}") from exc

    async def build(
        self,
        family: APIFamily,
        method: str,
        path: str,
        *,
        options: Sequence[Option] = (),
        params: Mapping[str, str] | None = None,
        entry: LegacyEntry | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> httpx.Request:
        """Build the request for one call.

        Args:
            family: Which API generation the path belongs to.
            method: HTTP method.
            path: Path relative to the family root; may carry a query string.
            options: Already validated options. They become query parameters
                for GET/DELETE and form fields otherwise.
            params: Extra query parameters set by the service itself.
            entry: Legacy write payload, sent as the form field ``data``.
            http: Performer the request is built for. Its default headers and
                cookies are merged in, and the headers set here take precedence.

        Raises:
            RequestConstructionError: If the path or the body cannot be encoded.
        """
        method = method.upper()
        url = self.resolve(family, path)
        query = dict(params or {})
        content: bytes | None = None

        if entry is not None:
            if options:
                raise RequestConstructionError("legacy writes do not accept options")
            content = urlencode({"data": entry.to_xml()}).encode("ascii")
        elif method in QUERY_METHODS:
            query.update(collect(options))
        else:
            form = collect(options)
            if form:
                content = urlencode(form).encode("ascii")

        if query:
            url = url.copy_merge_params(query)

        headers: dict[str, str] = {}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        if content is not None:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        headers.update(await self._auth_headers(family))

        if http is not None:
            return http.build_request(method, url, headers=headers, content=content)
        return httpx.Request(method, url, headers=headers, content=content)

    async def _auth_headers(self, family: APIFamily) -> dict[str, str]:
        if family is APIFamily.LEGACY:
            if self._credentials is not None:
                return {"Authorization": self._credentials.header()}
            return {}

        if self._token_source is not None:
            return {"Authorization": await self._token_source.header()}
        if self._client_id:
            return {"X-MAL-CLIENT-ID": self._client_id}
        return {}
