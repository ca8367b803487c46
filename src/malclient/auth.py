"""Credentials for the two MyAnimeList API generations.

Legacy endpoints authenticate with HTTP Basic; modern endpoints with an OAuth2
Bearer token. The OAuth2 dance itself (PKCE, token cache, browser) belongs to
the caller: this module only turns what the caller hands over into headers.
"""

from __future__ import annotations

import base64
import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from malclient.exceptions import TransportError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    TokenProvider = Callable[[], "str | Awaitable[str]"]


@dataclass(frozen=True)
class BasicCredentials:
    """Username and password for the legacy endpoints."""

    username: str
    password: str = field(repr=False)

    def header(self) -> str:
        """Return the value of the ``Authorization`` header."""
        raw = f"{self.username}:{self.password}".encode()
        return "Basic " + base64.b64encode(raw).decode("ascii")


class TokenSource:
    """Supplies the Bearer token for modern endpoints.

    Either a fixed token or a provider callable is used. The provider may be
    sync or async and is called before every request, so it is free to
    refresh an expired token.
    """

    def __init__(self, token: str | None = None, provider: TokenProvider | None = None) -> None:
        if (token is None) == (provider is None):
            raise ValueError("exactly one of token or provider must be given")
        self._token = token
        self._provider = provider

    def __repr__(self) -> str:
        kind = "static" if self._token is not None else "provider"
        return f"TokenSource({kind})"

    async def header(self) -> str:
        """Fetch the current token and return the ``Authorization`` header value.

        Raises:
            TransportError: If the provider fails or yields an empty token.
        """
        if self._token is not None:
            return f"Bearer {self._token}"

        assert self._provider is not None
        try:
            token = self._provider()
            if inspect.isawaitable(token):
                token = await token
        except Exception as exc:
            raise TransportError(f"token provider failed: {exc}") from exc

        if not token:
            raise TransportError("token provider returned an empty token")
        return f"Bearer {token}"
