"""Account endpoints of the legacy API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from malclient.constants import LegacyPath
from malclient.models import LegacyUser

if TYPE_CHECKING:
    import anyio

    from malclient.client import MALClient
    from malclient.transport import MALResponse


class AccountService:
    """Credential checks against the legacy API."""

    def __init__(self, client: MALClient) -> None:
        self._client = client

    async def verify(
        self, *, scope: anyio.CancelScope | None = None
    ) -> tuple[LegacyUser, MALResponse]:
        """Verify the Basic credentials the client was created with.

        Raises:
            NoContentError: The server answered 204, i.e. there is no user to
                return.
            HTTPStatusError: The credentials were rejected.
        """
        return await self._client.fetch_xml(LegacyPath.VERIFY_CREDENTIALS, LegacyUser, scope=scope)
