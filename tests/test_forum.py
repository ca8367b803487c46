"""Tests for malclient.forum module."""

from __future__ import annotations

import httpx
import pytest
import respx

from malclient.client import MALClient
from malclient.exceptions import UnsupportedOptionError
from malclient.options import BoardID, Fields, Limit, Offset, Query, SortTopics

API = "https://api.mal.test/v2/"


class TestBoards:
    """Given the forum board tree."""

    @respx.mock
    async def test_tree(self, api_client: MALClient) -> None:
        respx.get(API + "forum/boards").mock(
            return_value=httpx.Response(
                200,
                json={
                    "categories": [
                        {
                            "title": "MyAnimeList",
                            "boards": [
                                {
                                    "id": 5,
                                    "title": "Updates & Announcements",
                                    "subboards": [{"id": 2, "title": "Anime DB"}],
                                }
                            ],
                        }
                    ]
                },
            )
        )
        forum, _ = await api_client.forum.boards()
        board = forum.categories[0].boards[0]
        assert board.id == 5
        assert board.subboards[0].title == "Anime DB"


class TestTopics:
    """Given the forum topic search."""

    @respx.mock
    async def test_paging_offsets(self, api_client: MALClient) -> None:
        """When the server announces neighbours, their offsets land on the response."""
        route = respx.get(
            API + "forum/topics",
            params={"board_id": "1", "limit": "10", "offset": "0", "sort": "recent", "q": "foo"},
        ).mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": [{"id": 1}, {"id": 2}],
                    "paging": {"next": "?offset=4", "previous": "?offset=2"},
                },
            )
        )
        topics, response = await api_client.forum.topics(
            BoardID(1), Limit(10), Offset(0), SortTopics.RECENT, Query("foo")
        )
        assert route.called
        assert [topic.id for topic in topics] == [1, 2]
        assert response.next_offset == 4
        assert response.prev_offset == 2

    async def test_rejects_fields(self, api_client: MALClient) -> None:
        with pytest.raises(UnsupportedOptionError):
            await api_client.forum.topics(Fields("title"))


class TestTopicDetails:
    """Given a topic's posts."""

    @respx.mock
    async def test_posts_and_poll(self, api_client: MALClient) -> None:
        route = respx.get(API + "forum/topic/481", params={"limit": "1"}).mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": {
                        "title": "Best anime?",
                        "posts": [{"id": 9, "number": 1, "body": "Bebop"}],
                        "poll": {"id": 3, "question": "?", "options": [{"id": 1, "votes": 2}]},
                    },
                    "paging": {"next": "https://api.myanimelist.net/v2/forum/topic/481?offset=1"},
                },
            )
        )
        details, response = await api_client.forum.topic_details(481, Limit(1))
        assert route.called
        assert details.title == "Best anime?"
        assert details.posts[0].body == "Bebop"
        assert details.poll is not None
        assert details.poll.options[0].votes == 2
        assert response.next_offset == 1

    async def test_rejects_query(self, api_client: MALClient) -> None:
        with pytest.raises(UnsupportedOptionError):
            await api_client.forum.topic_details(481, Query("foo"))
