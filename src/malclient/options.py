"""Typed per-call options for the MyAnimeList client library.

Every option knows the parameter key it controls and how to serialize its
value. Options are tagged with one or more capabilities; each service method
declares the capabilities it accepts and rejects anything else before a
request is built.

Example:
    >>> from malclient.options import Fields, Limit, collect
    >>> collect([Limit(10), Fields("rank", "list_status{start_date, end_date}")])
    {'limit': '10', 'fields': 'rank,list_status{start_date, end_date}'}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from malclient.exceptions import UnsupportedOptionError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class Capability(StrEnum):
    """Labels that decide which endpoints may accept an option."""

    PAGING = "paging"
    FIELDS = "fields"
    SEARCH = "search"
    RANKING = "ranking"
    SEASONAL = "seasonal"
    FORUM_TOPICS = "forum-topics"
    LIST_QUERY_ANIME = "list-query-anime"
    LIST_QUERY_MANGA = "list-query-manga"
    UPDATE_ANIME = "update-anime"
    UPDATE_MANGA = "update-manga"


class Option:
    """Mixin shared by every option type.

    Subclasses expose their primitive under ``value`` and receive ``key`` and
    ``capabilities`` from the :func:`option` decorator.
    """

    key: ClassVar[str]
    capabilities: ClassVar[frozenset[Capability]]

    def serialize(self) -> str:
        """Return the wire form of the option value."""
        value: Any = self.value  # type: ignore[attr-defined]
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, tuple):
            return ",".join(value)
        return str(value)

    def apply(self, params: dict[str, str]) -> None:
        """Write this option into a parameter bag, replacing any previous value."""
        params[self.key] = self.serialize()


def option(key: str, *capabilities: Capability) -> Callable[[type], type]:
    """Class decorator binding an option type to its key and capability tags."""

    def decorate(cls: type) -> type:
        cls.key = key  # type: ignore[attr-defined]
        cls.capabilities = frozenset(capabilities)  # type: ignore[attr-defined]
        return cls

    return decorate


def _require_range(name: str, value: int, low: int, high: int | None = None) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} expects an int, got {type(value).__name__}")
    if value < low or (high is not None and value > high):
        bounds = f"{low}-{high}" if high is not None else f">= {low}"
        raise ValueError(f"{name} must be {bounds}, got {value}")


# ---------------------------------------------------------------------------
# Paging & fields
# ---------------------------------------------------------------------------


@option("limit", Capability.PAGING)
@dataclass(frozen=True)
class Limit(Option):
    """Maximum number of items in a page."""

    value: int

    def __post_init__(self) -> None:
        _require_range("Limit", self.value, 1)


@option("offset", Capability.PAGING)
@dataclass(frozen=True)
class Offset(Option):
    """Index of the first item of a page."""

    value: int

    def __post_init__(self) -> None:
        _require_range("Offset", self.value, 0)


@option("fields", Capability.FIELDS)
@dataclass(frozen=True, init=False)
class Fields(Option):
    """Attributes the server should include in the response.

    Nested selectors such as ``list_status{start_date, end_date}`` are kept
    verbatim.
    """

    value: tuple[str, ...]

    def __init__(self, *fields: str) -> None:
        object.__setattr__(self, "value", tuple(fields))


# ---------------------------------------------------------------------------
# Search & forum filters
# ---------------------------------------------------------------------------


@option("q", Capability.SEARCH, Capability.FORUM_TOPICS)
@dataclass(frozen=True)
class Query(Option):
    """Free-text search term."""

    value: str


@option("board_id", Capability.FORUM_TOPICS)
@dataclass(frozen=True)
class BoardID(Option):
    value: int


@option("subboard_id", Capability.FORUM_TOPICS)
@dataclass(frozen=True)
class SubboardID(Option):
    value: int


@option("topic_user_name", Capability.FORUM_TOPICS)
@dataclass(frozen=True)
class TopicUserName(Option):
    """Filter topics by the name of the user who opened them."""

    value: str


@option("user_name", Capability.FORUM_TOPICS)
@dataclass(frozen=True)
class UserName(Option):
    """Filter topics by a participating user."""

    value: str


@option("sort", Capability.FORUM_TOPICS)
class SortTopics(Option, StrEnum):
    RECENT = "recent"


# ---------------------------------------------------------------------------
# Rankings & seasons
# ---------------------------------------------------------------------------


@option("ranking_type", Capability.RANKING)
class AnimeRanking(Option, StrEnum):
    """How the anime ranking is computed."""

    ALL = "all"
    AIRING = "airing"
    UPCOMING = "upcoming"
    TV = "tv"
    OVA = "ova"
    MOVIE = "movie"
    SPECIAL = "special"
    BY_POPULARITY = "bypopularity"
    FAVORITE = "favorite"


@option("ranking_type", Capability.RANKING)
class MangaRanking(Option, StrEnum):
    """How the manga ranking is computed."""

    ALL = "all"
    MANGA = "manga"
    NOVELS = "novels"
    LIGHT_NOVELS = "lightnovels"
    ONESHOTS = "oneshots"
    DOUJIN = "doujin"
    MANHWA = "manhwa"
    MANHUA = "manhua"
    BY_POPULARITY = "bypopularity"
    FAVORITE = "favorite"


class Season(StrEnum):
    """Anime season; part of the seasonal path rather than a query option."""

    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


@option("sort", Capability.SEASONAL)
class SortSeasonal(Option, StrEnum):
    ANIME_SCORE = "anime_score"
    ANIME_NUM_LIST_USERS = "anime_num_list_users"


# ---------------------------------------------------------------------------
# User list filters & sorting
# ---------------------------------------------------------------------------


@option("status", Capability.LIST_QUERY_ANIME, Capability.UPDATE_ANIME)
class AnimeStatus(Option, StrEnum):
    """Status of an anime on a user's list; filters lists and updates entries."""

    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"


@option("status", Capability.LIST_QUERY_MANGA, Capability.UPDATE_MANGA)
class MangaStatus(Option, StrEnum):
    """Status of a manga on a user's list; filters lists and updates entries."""

    READING = "reading"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_READ = "plan_to_read"


@option("sort", Capability.LIST_QUERY_ANIME)
class SortAnimeList(Option, StrEnum):
    LIST_SCORE = "list_score"
    LIST_UPDATED_AT = "list_updated_at"
    ANIME_TITLE = "anime_title"
    ANIME_START_DATE = "anime_start_date"
    ANIME_ID = "anime_id"


@option("sort", Capability.LIST_QUERY_MANGA)
class SortMangaList(Option, StrEnum):
    LIST_SCORE = "list_score"
    LIST_UPDATED_AT = "list_updated_at"
    MANGA_TITLE = "manga_title"
    MANGA_START_DATE = "manga_start_date"
    MANGA_ID = "manga_id"


# ---------------------------------------------------------------------------
# List status updates
# ---------------------------------------------------------------------------


@option("score", Capability.UPDATE_ANIME, Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class Score(Option):
    """List score, 0-10."""

    value: int

    def __post_init__(self) -> None:
        _require_range("Score", self.value, 0, 10)


@option("num_watched_episodes", Capability.UPDATE_ANIME)
@dataclass(frozen=True)
class NumEpisodesWatched(Option):
    value: int

    def __post_init__(self) -> None:
        _require_range("NumEpisodesWatched", self.value, 0)


@option("is_rewatching", Capability.UPDATE_ANIME)
@dataclass(frozen=True)
class IsRewatching(Option):
    value: bool


@option("num_times_rewatched", Capability.UPDATE_ANIME)
@dataclass(frozen=True)
class NumTimesRewatched(Option):
    value: int

    def __post_init__(self) -> None:
        _require_range("NumTimesRewatched", self.value, 0)


@option("rewatch_value", Capability.UPDATE_ANIME)
@dataclass(frozen=True)
class RewatchValue(Option):
    """Rewatch value: 0 none, 1 very low, 2 low, 3 medium, 4 high, 5 very high."""

    value: int

    def __post_init__(self) -> None:
        _require_range("RewatchValue", self.value, 0, 5)


@option("num_volumes_read", Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class NumVolumesRead(Option):
    value: int

    def __post_init__(self) -> None:
        _require_range("NumVolumesRead", self.value, 0)


@option("num_chapters_read", Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class NumChaptersRead(Option):
    value: int

    def __post_init__(self) -> None:
        _require_range("NumChaptersRead", self.value, 0)


@option("is_rereading", Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class IsRereading(Option):
    value: bool


@option("num_times_reread", Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class NumTimesReread(Option):
    value: int

    def __post_init__(self) -> None:
        _require_range("NumTimesReread", self.value, 0)


@option("reread_value", Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class RereadValue(Option):
    """Reread value: 0 none, 1 very low, 2 low, 3 medium, 4 high, 5 very high."""

    value: int

    def __post_init__(self) -> None:
        _require_range("RereadValue", self.value, 0, 5)


@option("priority", Capability.UPDATE_ANIME, Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class Priority(Option):
    """Priority: 0 low, 1 medium, 2 high."""

    value: int

    def __post_init__(self) -> None:
        _require_range("Priority", self.value, 0, 2)


@option("tags", Capability.UPDATE_ANIME, Capability.UPDATE_MANGA)
@dataclass(frozen=True, init=False)
class Tags(Option):
    """List tags, sent comma-joined in the given order."""

    value: tuple[str, ...]

    def __init__(self, *tags: str) -> None:
        object.__setattr__(self, "value", tuple(tags))


@option("comments", Capability.UPDATE_ANIME, Capability.UPDATE_MANGA)
@dataclass(frozen=True)
class Comments(Option):
    value: str


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def check_options(
    options: Iterable[object],
    accepted: frozenset[Capability],
    operation: str,
) -> list[Option]:
    """Validate that every option carries a capability the operation accepts.

    Raises:
        UnsupportedOptionError: On the first option outside ``accepted``.
    """
    checked: list[Option] = []
    for opt in options:
        if not isinstance(opt, Option) or not (opt.capabilities & accepted):
            raise UnsupportedOptionError(opt, operation)  # type: ignore[arg-type]
        checked.append(opt)
    return checked


def collect(options: Iterable[Option]) -> dict[str, str]:
    """Serialize options into a parameter bag; later options win on key clashes."""
    params: dict[str, str] = {}
    for opt in options:
        opt.apply(params)
    return params
