"""Forum endpoints of the v2 API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from malclient.constants import APIPath
from malclient.models import Forum, Page, Topic, TopicDetails
from malclient.options import Capability, check_options
from malclient.paging import apply_paging

if TYPE_CHECKING:
    import anyio

    from malclient.client import MALClient
    from malclient.options import Option
    from malclient.transport import MALResponse

TOPICS_OPTIONS = frozenset({Capability.FORUM_TOPICS, Capability.PAGING})
TOPIC_DETAILS_OPTIONS = frozenset({Capability.PAGING})


class ForumService:
    """Read-only access to the MyAnimeList forum."""

    def __init__(self, client: MALClient) -> None:
        self._client = client

    async def boards(self, *, scope: anyio.CancelScope | None = None) -> tuple[Forum, MALResponse]:
        """Fetch the board tree: categories, their boards and subboards."""
        return await self._client.fetch_json(APIPath.FORUM_BOARDS, Forum, scope=scope)

    async def topics(
        self, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[list[Topic], MALResponse]:
        """Search forum topics.

        Accepts ``BoardID``, ``SubboardID``, ``Query``, ``TopicUserName``,
        ``UserName``, ``SortTopics`` and paging.
        """
        checked = check_options(options, TOPICS_OPTIONS, "Forum.topics")
        return await self._client.fetch_page(APIPath.FORUM_TOPICS, Topic, options=checked, scope=scope)

    async def topic_details(
        self, topic_id: int, *options: Option, scope: anyio.CancelScope | None = None
    ) -> tuple[TopicDetails, MALResponse]:
        """Fetch one page of posts of a topic, plus its poll if any."""
        checked = check_options(options, TOPIC_DETAILS_OPTIONS, "Forum.topic_details")
        path = APIPath.FORUM_TOPIC.format(id=topic_id)
        page, response = await self._client.fetch_json(
            path, Page[TopicDetails], options=checked, scope=scope
        )
        apply_paging(response, page.paging)
        return page.data, response
