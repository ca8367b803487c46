"""TOML configuration management for the MyAnimeList client library.

Credentials never live here; they are handed to :class:`malclient.MALClient`
directly.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from malclient.constants import (
    DEFAULT_API_URL,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from malclient.exceptions import ConfigError
from malclient.utils import ensure_dir, get_data_dir


@dataclass
class ClientConfig:
    """Client configuration.

    ``base_url`` is the root of the legacy endpoints, ``api_url`` the root of
    the v2 tree. An empty ``user_agent`` disables the header.
    """

    base_url: str = DEFAULT_BASE_URL
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    client_id: str = ""


# TOML key -> expected Python type
_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "base_url": (str,),
    "api_url": (str,),
    "user_agent": (str,),
    "timeout": (int, float),
    "client_id": (str,),
}


def get_config_path() -> Path:
    """Return the path to config.toml inside the data directory."""
    return get_data_dir() / "config.toml"


def load_config(path: Path | None = None) -> ClientConfig:
    """Load configuration from the TOML file.

    Returns a default ``ClientConfig`` when the file does not exist.
    Raises ``ConfigError`` if the file cannot be parsed or a value has the
    wrong type. Unknown keys are ignored.
    """
    path = path or get_config_path()

    if not path.exists():
        return ClientConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc

    kwargs: dict[str, object] = {}
    for key, types in _FIELD_TYPES.items():
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, types):
            raise ConfigError(f"{path}: {key} has invalid type {type(value).__name__}")
        kwargs[key] = float(value) if key == "timeout" else value

    timeout = kwargs.get("timeout", DEFAULT_TIMEOUT)
    if timeout <= 0:  # type: ignore[operator]
        raise ConfigError(f"{path}: timeout must be positive")

    return ClientConfig(**kwargs)  # type: ignore[arg-type]


def _toml_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def save_config(config: ClientConfig, path: Path | None = None) -> None:
    """Serialize *config* to the TOML file.

    Uses a simple manual formatter since the stdlib ``tomllib`` is read-only.
    """
    path = path or get_config_path()
    ensure_dir(path.parent)

    lines = [
        f"base_url = {_toml_string(config.base_url)}",
        f"api_url = {_toml_string(config.api_url)}",
        f"user_agent = {_toml_string(config.user_agent)}",
        f"timeout = {float(config.timeout)}",
        f"client_id = {_toml_string(config.client_id)}",
    ]

    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

