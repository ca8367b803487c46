"""Constants for the MyAnimeList client library."""

from enum import IntEnum, StrEnum

# Application name
APP_NAME = "malclient"

__version__ = "0.4.0"

# Base locations (both must end with a slash so relative paths resolve under them)
DEFAULT_BASE_URL = "https://myanimelist.net/"
DEFAULT_API_URL = "https://api.myanimelist.net/v2/"

# Default User-Agent string (library marker)
DEFAULT_USER_AGENT = f"{APP_NAME}/{__version__}"

# Request timeout
DEFAULT_TIMEOUT: float = 30.0

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class APIFamily(StrEnum):
    """The two API generations served from MyAnimeList.

    LEGACY endpoints live under ``/api/...*.xml`` and ``/malappinfo.php``, use
    HTTP Basic auth and speak XML. MODERN endpoints live under the v2 tree,
    use a Bearer token and speak JSON.
    """

    LEGACY = "legacy"
    MODERN = "modern"


class LegacyStatus(IntEnum):
    """Numeric list status accepted by the legacy write endpoints."""

    CURRENT = 1  # watching / reading
    COMPLETED = 2
    ON_HOLD = 3
    DROPPED = 4
    PLANNED = 6  # plan to watch / plan to read


# Legacy endpoint paths, relative to DEFAULT_BASE_URL
class LegacyPath:
    """Path templates for the legacy XML endpoints."""

    VERIFY_CREDENTIALS = "api/account/verify_credentials.xml"
    LIST = "malappinfo.php"
    ANIME_SEARCH = "api/anime/search.xml"
    ANIME_ADD = "api/animelist/add/{id}.xml"
    ANIME_UPDATE = "api/animelist/update/{id}.xml"
    ANIME_DELETE = "api/animelist/delete/{id}.xml"
    MANGA_SEARCH = "api/manga/search.xml"
    MANGA_ADD = "api/mangalist/add/{id}.xml"
    MANGA_UPDATE = "api/mangalist/update/{id}.xml"
    MANGA_DELETE = "api/mangalist/delete/{id}.xml"


# Modern endpoint paths, relative to DEFAULT_API_URL
class APIPath:
    """Path templates for the modern JSON endpoints."""

    ANIME = "anime"
    ANIME_DETAILS = "anime/{id}"
    ANIME_RANKING = "anime/ranking"
    ANIME_SEASONAL = "anime/season/{year}/{season}"
    ANIME_SUGGESTIONS = "anime/suggestions"
    ANIME_MY_LIST_STATUS = "anime/{id}/my_list_status"
    MANGA = "manga"
    MANGA_DETAILS = "manga/{id}"
    MANGA_RANKING = "manga/ranking"
    MANGA_MY_LIST_STATUS = "manga/{id}/my_list_status"
    USER_ME = "users/@me"
    USER_ANIME_LIST = "users/{name}/animelist"
    USER_MANGA_LIST = "users/{name}/mangalist"
    FORUM_BOARDS = "forum/boards"
    FORUM_TOPICS = "forum/topics"
    FORUM_TOPIC = "forum/topic/{id}"
