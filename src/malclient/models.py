"""Pydantic data models for the MyAnimeList client library."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Shared pieces (modern API)
# ---------------------------------------------------------------------------


class Picture(BaseModel):
    model_config = ConfigDict(frozen=True)

    medium: str = ""
    large: str = ""


class AlternativeTitles(BaseModel):
    model_config = ConfigDict(frozen=True)

    synonyms: list[str] = []
    en: str = ""
    ja: str = ""


class Genre(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str = ""


class RelatedNode(BaseModel):
    """Minimal record of an anime or manga referenced from another entry."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    title: str = ""
    main_picture: Picture | None = None


class Relation(BaseModel):
    node: RelatedNode
    relation_type: str = ""
    relation_type_formatted: str = ""


class Recommendation(BaseModel):
    node: RelatedNode
    num_recommendations: int = 0


class Paging(BaseModel):
    """Links to the neighbouring pages of a list response."""

    next: str = ""
    previous: str = ""


class Page(BaseModel, Generic[T]):
    """Envelope shared by every modern list endpoint."""

    data: T
    paging: Paging = Field(default_factory=Paging)


class Node(BaseModel, Generic[T]):
    """Catalogue list item; extra keys such as ``ranking`` are ignored."""

    node: T


class ErrorPayload(BaseModel):
    """Error document returned by the modern API on failure."""

    message: str = ""
    error: str = ""


# ---------------------------------------------------------------------------
# Anime (modern API)
# ---------------------------------------------------------------------------


class AnimeListStatus(BaseModel):
    """Status of an anime on a user's list."""

    status: str = ""
    score: int = 0
    num_episodes_watched: int = 0
    is_rewatching: bool = False
    updated_at: datetime | None = None
    priority: int = 0
    num_times_rewatched: int = 0
    rewatch_value: int = 0
    tags: list[str] = []
    comments: str = ""
    start_date: str = ""
    finish_date: str = ""


class StartSeason(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int = 0
    season: str = ""


class Broadcast(BaseModel):
    model_config = ConfigDict(frozen=True)

    day_of_the_week: str = ""
    start_time: str = ""


class Studio(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str = ""


class Anime(BaseModel):
    """A MyAnimeList anime.

    Only ``id`` and ``title`` are returned unless more fields are requested
    with the :class:`~malclient.options.Fields` option.
    """

    id: int = 0
    title: str = ""
    main_picture: Picture | None = None
    alternative_titles: AlternativeTitles | None = None
    start_date: str = ""
    end_date: str = ""
    synopsis: str = ""
    mean: float = 0.0
    rank: int = 0
    popularity: int = 0
    num_list_users: int = 0
    num_scoring_users: int = 0
    nsfw: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    media_type: str = ""
    status: str = ""
    genres: list[Genre] = []
    my_list_status: AnimeListStatus | None = None
    num_episodes: int = 0
    start_season: StartSeason | None = None
    broadcast: Broadcast | None = None
    source: str = ""
    average_episode_duration: int = 0
    rating: str = ""
    pictures: list[Picture] = []
    background: str = ""
    related_anime: list[Relation] = []
    related_manga: list[Relation] = []
    recommendations: list[Recommendation] = []
    studios: list[Studio] = []


class UserAnime(BaseModel):
    """An anime together with its status on a user's list."""

    model_config = ConfigDict(populate_by_name=True)

    anime: Anime = Field(alias="node")
    status: AnimeListStatus = Field(default_factory=AnimeListStatus, alias="list_status")


# ---------------------------------------------------------------------------
# Manga (modern API)
# ---------------------------------------------------------------------------


class MangaListStatus(BaseModel):
    """Status of a manga on a user's list."""

    status: str = ""
    is_rereading: bool = False
    num_volumes_read: int = 0
    num_chapters_read: int = 0
    score: int = 0
    updated_at: datetime | None = None
    priority: int = 0
    num_times_reread: int = 0
    reread_value: int = 0
    tags: list[str] = []
    comments: str = ""
    start_date: str = ""
    finish_date: str = ""


class Person(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0
    first_name: str = ""
    last_name: str = ""


class Author(BaseModel):
    node: Person
    role: str = ""


class Magazine(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str = ""


class Serialization(BaseModel):
    node: Magazine
    role: str = ""


class Manga(BaseModel):
    """A MyAnimeList manga."""

    id: int = 0
    title: str = ""
    main_picture: Picture | None = None
    alternative_titles: AlternativeTitles | None = None
    start_date: str = ""
    end_date: str = ""
    synopsis: str = ""
    mean: float = 0.0
    rank: int = 0
    popularity: int = 0
    num_list_users: int = 0
    num_scoring_users: int = 0
    nsfw: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    media_type: str = ""
    status: str = ""
    genres: list[Genre] = []
    my_list_status: MangaListStatus | None = None
    num_volumes: int = 0
    num_chapters: int = 0
    authors: list[Author] = []
    pictures: list[Picture] = []
    background: str = ""
    related_anime: list[Relation] = []
    related_manga: list[Relation] = []
    recommendations: list[Recommendation] = []
    serialization: list[Serialization] = []


class UserManga(BaseModel):
    """A manga together with its status on a user's list."""

    model_config = ConfigDict(populate_by_name=True)

    manga: Manga = Field(alias="node")
    status: MangaListStatus = Field(default_factory=MangaListStatus, alias="list_status")


# ---------------------------------------------------------------------------
# User (modern API)
# ---------------------------------------------------------------------------


class AnimeStatistics(BaseModel):
    num_items_watching: int = 0
    num_items_completed: int = 0
    num_items_on_hold: int = 0
    num_items_dropped: int = 0
    num_items_plan_to_watch: int = 0
    num_items: int = 0
    num_days_watched: float = 0.0
    num_days_watching: float = 0.0
    num_days_completed: float = 0.0
    num_days_on_hold: float = 0.0
    num_days_dropped: float = 0.0
    num_days: float = 0.0
    num_episodes: int = 0
    num_times_rewatched: int = 0
    mean_score: float = 0.0


class User(BaseModel):
    """A MyAnimeList user as returned by ``users/@me``."""

    id: int = 0
    name: str = ""
    picture: str = ""
    gender: str = ""
    birthday: str = ""
    location: str = ""
    joined_at: datetime | None = None
    time_zone: str = ""
    is_supporter: bool = False
    anime_statistics: AnimeStatistics | None = None


# ---------------------------------------------------------------------------
# Forum (modern API)
# ---------------------------------------------------------------------------


class ForumSubboard(BaseModel):
    id: int = 0
    title: str = ""


class ForumBoard(BaseModel):
    id: int = 0
    title: str = ""
    description: str = ""
    subboards: list[ForumSubboard] = []


class ForumCategory(BaseModel):
    title: str = ""
    boards: list[ForumBoard] = []


class Forum(BaseModel):
    """The board tree of the forum."""

    categories: list[ForumCategory] = []


class CreatedBy(BaseModel):
    id: int = 0
    name: str = ""
    forum_avator: str = ""


class Topic(BaseModel):
    id: int = 0
    title: str = ""
    created_at: datetime | None = None
    created_by: CreatedBy | None = None
    number_of_posts: int = 0
    last_post_created_at: datetime | None = None
    last_post_created_by: CreatedBy | None = None
    is_locked: bool = False


class Post(BaseModel):
    id: int = 0
    number: int = 0
    created_at: datetime | None = None
    created_by: CreatedBy | None = None
    body: str = ""
    signature: str = ""


class PollOption(BaseModel):
    id: int = 0
    text: str = ""
    votes: int = 0


class Poll(BaseModel):
    id: int = 0
    question: str = ""
    closed: bool = False
    options: list[PollOption] = []


class TopicDetails(BaseModel):
    """The posts of a forum topic and its optional poll."""

    title: str = ""
    posts: list[Post] = []
    poll: Poll | None = None


# ---------------------------------------------------------------------------
# Legacy XML records
# ---------------------------------------------------------------------------


class LegacyUser(BaseModel):
    """User returned by ``verify_credentials.xml``."""

    id: int = 0
    username: str = ""


class AnimeRow(BaseModel):
    """One result of a legacy anime search."""

    id: int = 0
    title: str = ""
    english: str = ""
    synonyms: str = ""
    episodes: int = 0
    score: float = 0.0
    type: str = ""
    status: str = ""
    start_date: str = ""
    end_date: str = ""
    synopsis: str = ""
    image: str = ""


class MangaRow(BaseModel):
    """One result of a legacy manga search."""

    id: int = 0
    title: str = ""
    english: str = ""
    synonyms: str = ""
    chapters: int = 0
    volumes: int = 0
    score: float = 0.0
    type: str = ""
    status: str = ""
    start_date: str = ""
    end_date: str = ""
    synopsis: str = ""
    image: str = ""


class AnimeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rows: list[AnimeRow] = Field(default=[], alias="entry")


class MangaResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rows: list[MangaRow] = Field(default=[], alias="entry")


class AnimeMyInfo(BaseModel):
    """Counters about a user's anime list, sent with the legacy list dump."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(default=0, alias="user_id")
    name: str = Field(default="", alias="user_name")
    watching: int = Field(default=0, alias="user_watching")
    completed: int = Field(default=0, alias="user_completed")
    on_hold: int = Field(default=0, alias="user_onhold")
    dropped: int = Field(default=0, alias="user_dropped")
    plan_to_watch: int = Field(default=0, alias="user_plantowatch")
    days_spent_watching: str = Field(default="", alias="user_days_spent_watching")


class MangaMyInfo(BaseModel):
    """Counters about a user's manga list, sent with the legacy list dump."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(default=0, alias="user_id")
    name: str = Field(default="", alias="user_name")
    reading: int = Field(default=0, alias="user_reading")
    completed: int = Field(default=0, alias="user_completed")
    on_hold: int = Field(default=0, alias="user_onhold")
    dropped: int = Field(default=0, alias="user_dropped")
    plan_to_read: int = Field(default=0, alias="user_plantoread")
    days_spent_watching: str = Field(default="", alias="user_days_spent_watching")


class LegacyAnime(BaseModel):
    """An anime in the legacy list dump.

    ``series_*`` fields describe the anime, ``my_*`` fields the user's entry.
    ``my_status`` uses the numeric values of
    :class:`~malclient.constants.LegacyStatus`.
    """

    series_animedb_id: int = 0
    series_title: str = ""
    series_synonyms: str = ""
    series_type: int = 0
    series_episodes: int = 0
    series_status: int = 0
    series_start: str = ""
    series_end: str = ""
    series_image: str = ""
    my_id: int = 0
    my_watched_episodes: int = 0
    my_start_date: str = ""
    my_finish_date: str = ""
    my_score: int = 0
    my_status: int = 0
    my_rewatching: int = 0
    my_rewatching_ep: int = 0
    my_last_updated: str = ""
    my_tags: str = ""


class LegacyManga(BaseModel):
    """A manga in the legacy list dump."""

    series_mangadb_id: int = 0
    series_title: str = ""
    series_synonyms: str = ""
    series_type: int = 0
    series_chapters: int = 0
    series_volumes: int = 0
    series_status: int = 0
    series_start: str = ""
    series_end: str = ""
    series_image: str = ""
    my_id: int = 0
    my_read_chapters: int = 0
    my_read_volumes: int = 0
    my_start_date: str = ""
    my_finish_date: str = ""
    my_score: int = 0
    my_status: int = 0
    # Some dumps spell this tag with a double g.
    my_rereading: int = Field(
        default=0,
        validation_alias=AliasChoices("my_rereading", "my_rewatching", "my_rewatchingg"),
    )
    my_rereading_chap: int = Field(
        default=0,
        validation_alias=AliasChoices("my_rereading_chap", "my_rewatching_ep"),
    )
    my_last_updated: str = ""
    my_tags: str = ""


class AnimeList(BaseModel):
    """A user's anime list from ``malappinfo.php``.

    ``error`` is set when the document reports a failure such as an unknown
    user.
    """

    model_config = ConfigDict(populate_by_name=True)

    my_info: AnimeMyInfo = Field(default_factory=AnimeMyInfo, alias="myinfo")
    anime: list[LegacyAnime] = []
    error: str = ""


class MangaList(BaseModel):
    """A user's manga list from ``malappinfo.php``."""

    model_config = ConfigDict(populate_by_name=True)

    my_info: MangaMyInfo = Field(default_factory=MangaMyInfo, alias="myinfo")
    manga: list[LegacyManga] = []
    error: str = ""
