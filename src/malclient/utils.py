"""Utility functions for the MyAnimeList client library."""

import logging
from datetime import date
from pathlib import Path
from urllib.parse import quote

import structlog


def path_segment(value: str) -> str:
    """Percent-encode free text for use as a single URL path segment.

    ``@`` is kept so the ``@me`` alias reaches the server as is. A segment
    made only of dots is encoded as well, since URL resolution would
    otherwise remove it as a dot segment.

    Example:
        >>> path_segment("John Doe/2")
        'John%20Doe%2F2'
        >>> path_segment("@me")
        '@me'
        >>> path_segment("..")
        '%2E%2E'
    """
    if value and not value.strip("."):
        return value.replace(".", "%2E")
    return quote(value, safe="@")


def format_legacy_date(value: date | str) -> str:
    """Format a date the way the legacy write endpoints expect (MMDDYYYY).

    Strings are assumed to be formatted already and are passed through.

    Example:
        >>> format_legacy_date(date(2015, 3, 9))
        '03092015'
    """
    if isinstance(value, date):
        return value.strftime("%m%d%Y")
    return value


def ensure_dir(path: Path) -> Path:
    """Create directory if it doesn't exist, return it.

    Example:
        >>> ensure_dir(Path("/tmp/test_dir"))
        PosixPath('/tmp/test_dir')
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Get the data directory path (``~/.config/malclient``)."""
    return Path.home() / ".config" / "malclient"


def setup_logging(verbose: bool = False) -> None:
    """Configure structlog with colorful console output.

    Args:
        verbose: If True, set log level to DEBUG, else INFO.
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
