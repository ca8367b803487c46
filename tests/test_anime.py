"""Tests for malclient.anime module."""

from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest
import respx

from malclient.client import MALClient
from malclient.constants import LegacyStatus
from malclient.entries import AnimeEntry
from malclient.exceptions import APIError, NoContentError, SoftError, UnsupportedOptionError
from malclient.options import (
    AnimeRanking,
    AnimeStatus,
    Comments,
    Fields,
    Limit,
    NumChaptersRead,
    NumEpisodesWatched,
    Offset,
    Score,
    Season,
    SortSeasonal,
)

BASE = "https://mal.test/"
API = "https://api.mal.test/v2/"

# ---------------------------------------------------------------------------
# Legacy search & list
# ---------------------------------------------------------------------------


class TestLegacySearch:
    """Given the legacy anime search endpoint."""

    @respx.mock
    async def test_rows_are_decoded(self, legacy_client: MALClient) -> None:
        route = respx.get(BASE + "api/anime/search.xml", params={"q": "bebop"}).mock(
            return_value=httpx.Response(
                200,
                text=(
                    "<anime><entry><id>1</id><title>Cowboy Bebop</title>"
                    "<episodes>26</episodes><score>8.78</score><type>TV</type></entry></anime>"
                ),
            )
        )
        result, _ = await legacy_client.anime.search("bebop")
        assert route.called
        assert result.rows[0].title == "Cowboy Bebop"
        assert result.rows[0].episodes == 26

    @respx.mock
    async def test_no_content(self, legacy_client: MALClient) -> None:
        """When nothing matches and the server answers 204, the response is preserved."""
        respx.get(BASE + "api/anime/search.xml").mock(return_value=httpx.Response(204))
        with pytest.raises(NoContentError) as exc_info:
            await legacy_client.anime.search("nothing")
        assert exc_info.value.response.status_code == 204

    @respx.mock
    async def test_query_is_not_retained_between_calls(self, legacy_client: MALClient) -> None:
        """When searching twice, the second request only carries its own query."""
        route = respx.get(BASE + "api/anime/search.xml").mock(
            return_value=httpx.Response(200, text="<anime></anime>")
        )
        await legacy_client.anime.search("first")
        await legacy_client.anime.search("second")
        assert dict(route.calls.last.request.url.params) == {"q": "second"}


class TestLegacyUserList:
    """Given the malappinfo.php list dump."""

    @respx.mock
    async def test_invalid_user_is_soft_error(self, legacy_client: MALClient) -> None:
        """When the document reports an error, SoftError carries the partial list."""
        respx.get(
            BASE + "malappinfo.php",
            params={"status": "all", "type": "anime", "u": "InvalidUser"},
        ).mock(
            return_value=httpx.Response(
                200, text="<myanimelist><error>Invalid username</error></myanimelist>"
            )
        )
        with pytest.raises(SoftError) as exc_info:
            await legacy_client.anime.user_list("InvalidUser")
        assert exc_info.value.result.error == "Invalid username"
        assert exc_info.value.response.status_code == 200
        assert str(exc_info.value) == "Invalid username"

    @respx.mock
    async def test_list(self, legacy_client: MALClient) -> None:
        respx.get(BASE + "malappinfo.php").mock(
            return_value=httpx.Response(
                200,
                text=(
                    "<myanimelist><myinfo><user_id>1</user_id><user_name>TestUser</user_name>"
                    "</myinfo><anime><series_animedb_id>1</series_animedb_id>"
                    "<series_title>Cowboy Bebop &bull; Remastered</series_title>"
                    "<my_watched_episodes>26</my_watched_episodes><my_status>2</my_status>"
                    "</anime></myanimelist>"
                ),
            )
        )
        result, response = await legacy_client.anime.user_list("TestUser")
        assert result.my_info.name == "TestUser"
        assert result.anime[0].series_title == "Cowboy Bebop &bull; Remastered"
        assert result.anime[0].my_status == LegacyStatus.COMPLETED
        assert b"&bull;" in response.body


# ---------------------------------------------------------------------------
# Legacy writes
# ---------------------------------------------------------------------------


class TestLegacyWrites:
    """Given the legacy anime list write endpoints."""

    @respx.mock
    async def test_add(self, legacy_client: MALClient) -> None:
        """When adding with status watching, data=<entry> is posted as a form."""
        route = respx.post(BASE + "api/animelist/add/55.xml").mock(
            return_value=httpx.Response(201, text="Created")
        )
        response = await legacy_client.anime.add(55, AnimeEntry(status="watching"))
        assert response.status_code == 201

        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.content.decode()) == {
            "data": ["<entry><status>watching</status></entry>"]
        }

    @respx.mock
    async def test_update(self, legacy_client: MALClient) -> None:
        route = respx.post(BASE + "api/animelist/update/55.xml").mock(
            return_value=httpx.Response(200, text="Updated")
        )
        await legacy_client.anime.update(55, AnimeEntry(episode=3, status=LegacyStatus.CURRENT))
        data = parse_qs(route.calls.last.request.content.decode())["data"][0]
        assert data == "<entry><episode>3</episode><status>1</status></entry>"

    @respx.mock
    async def test_delete(self, legacy_client: MALClient) -> None:
        route = respx.delete(BASE + "api/animelist/delete/55.xml").mock(
            return_value=httpx.Response(200, text="Deleted")
        )
        response = await legacy_client.anime.delete(55)
        assert route.called
        assert response.text == "Deleted"


# ---------------------------------------------------------------------------
# v2 catalogue
# ---------------------------------------------------------------------------


class TestDetails:
    """Given the v2 anime details endpoint."""

    @respx.mock
    async def test_fields(self, api_client: MALClient) -> None:
        route = respx.get(API + "anime/1", params={"fields": "rank,mean"}).mock(
            return_value=httpx.Response(200, json={"id": 1, "title": "Cowboy Bebop", "rank": 28})
        )
        anime, _ = await api_client.anime.details(1, Fields("rank", "mean"))
        assert route.called
        assert anime.rank == 28
        assert route.calls.last.request.headers["Authorization"] == "Bearer test-token"

    async def test_unsupported_option_is_rejected_before_sending(
        self, api_client: MALClient
    ) -> None:
        """When a paging option is passed to details, no request is made."""
        with respx.mock(assert_all_called=False) as router:
            route = router.get(API + "anime/1")
            with pytest.raises(UnsupportedOptionError):
                await api_client.anime.details(1, Limit(1))
            assert not route.called

    @respx.mock
    async def test_not_found(self, api_client: MALClient) -> None:
        respx.get(API + "anime/0").mock(
            return_value=httpx.Response(404, json={"message": "", "error": "not_found"})
        )
        with pytest.raises(APIError) as exc_info:
            await api_client.anime.details(0)
        assert exc_info.value.payload.error == "not_found"


class TestLists:
    """Given the v2 anime list endpoints."""

    @respx.mock
    async def test_find(self, api_client: MALClient) -> None:
        route = respx.get(API + "anime", params={"q": "one", "limit": "4"}).mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": [{"node": {"id": 21, "title": "One Piece"}}],
                    "paging": {"next": API + "anime?offset=4&q=one&limit=4"},
                },
            )
        )
        items, response = await api_client.anime.find("one", Limit(4))
        assert route.called
        assert [anime.title for anime in items] == ["One Piece"]
        assert response.next_offset == 4
        assert response.prev_offset == 0

    @respx.mock
    async def test_ranking(self, api_client: MALClient) -> None:
        body = {
            "data": [
                {"node": {"id": 1}, "ranking": {"rank": 1}},
                {"node": {"id": 2}, "ranking": {"rank": 2}},
            ]
        }
        route = respx.get(
            API + "anime/ranking", params={"ranking_type": "airing", "limit": "2", "offset": "0"}
        ).mock(return_value=httpx.Response(200, json=body))
        items, _ = await api_client.anime.ranking(AnimeRanking.AIRING, Limit(2), Offset(0))
        assert route.called
        assert [anime.id for anime in items] == [1, 2]

    @respx.mock
    async def test_seasonal(self, api_client: MALClient) -> None:
        route = respx.get(
            API + "anime/season/2017/summer", params={"sort": "anime_score"}
        ).mock(return_value=httpx.Response(200, json={"data": []}))
        items, _ = await api_client.anime.seasonal(2017, Season.SUMMER, SortSeasonal.ANIME_SCORE)
        assert route.called
        assert items == []

    @respx.mock
    async def test_suggested(self, api_client: MALClient) -> None:
        route = respx.get(API + "anime/suggestions").mock(
            return_value=httpx.Response(200, json={"data": [{"node": {"id": 5}}]})
        )
        items, _ = await api_client.anime.suggested(Limit(1))
        assert route.called
        assert items[0].id == 5

    async def test_ranking_rejects_status(self, api_client: MALClient) -> None:
        with pytest.raises(UnsupportedOptionError):
            await api_client.anime.ranking(AnimeRanking.ALL, AnimeStatus.WATCHING)


# ---------------------------------------------------------------------------
# v2 list status
# ---------------------------------------------------------------------------


class TestMyListStatus:
    """Given the v2 my_list_status endpoint."""

    @respx.mock
    async def test_update(self, api_client: MALClient) -> None:
        """When updating, options are form-encoded and the status record is returned."""
        route = respx.patch(API + "anime/967/my_list_status").mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "watching",
                    "score": 8,
                    "num_episodes_watched": 73,
                    "comments": "You wa shock!",
                },
            )
        )
        status, _ = await api_client.anime.update_my_list_status(
            967,
            AnimeStatus.WATCHING,
            NumEpisodesWatched(73),
            Score(8),
            Comments("You wa shock!"),
        )
        assert status.status == AnimeStatus.WATCHING
        assert status.score == 8
        assert status.num_episodes_watched == 73
        assert status.comments == "You wa shock!"

        form = parse_qs(route.calls.last.request.content.decode())
        assert form == {
            "status": ["watching"],
            "num_watched_episodes": ["73"],
            "score": ["8"],
            "comments": ["You wa shock!"],
        }

    async def test_update_rejects_manga_options(self, api_client: MALClient) -> None:
        with pytest.raises(UnsupportedOptionError):
            await api_client.anime.update_my_list_status(1, NumChaptersRead(3))

    @respx.mock
    async def test_delete(self, api_client: MALClient) -> None:
        route = respx.delete(API + "anime/967/my_list_status").mock(
            return_value=httpx.Response(200, json=[])
        )
        response = await api_client.anime.delete_my_list_item(967)
        assert route.called
        assert response.status_code == 200
