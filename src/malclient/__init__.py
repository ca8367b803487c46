"""Async client for the MyAnimeList legacy and v2 APIs."""

from malclient.client import MALClient
from malclient.config import ClientConfig, load_config
from malclient.constants import LegacyStatus, __version__
from malclient.entries import AnimeEntry, MangaEntry
from malclient.exceptions import (
    APIError,
    ConfigError,
    DecodeError,
    HTTPStatusError,
    MALError,
    NoContentError,
    RequestConstructionError,
    ResponseError,
    SoftError,
    TransportError,
    UnsupportedOptionError,
)
from malclient.paging import paginate
from malclient.transport import MALResponse

__all__ = [
    "APIError",
    "AnimeEntry",
    "ClientConfig",
    "ConfigError",
    "DecodeError",
    "HTTPStatusError",
    "LegacyStatus",
    "MALClient",
    "MALError",
    "MALResponse",
    "MangaEntry",
    "NoContentError",
    "RequestConstructionError",
    "ResponseError",
    "SoftError",
    "TransportError",
    "UnsupportedOptionError",
    "__version__",
    "load_config",
    "paginate",
]
