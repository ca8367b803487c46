"""Write payloads for the legacy list endpoints.

An entry is sent as ``data=<entry>...</entry>`` in a URL-encoded form. Only
non-zero fields are emitted, except the few the server needs to see even when
they are zero; those are emitted whenever they are set (not ``None``).
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import date
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel

from malclient.exceptions import RequestConstructionError
from malclient.utils import format_legacy_date

# Characters that cannot appear in an XML 1.0 document
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _xml_text(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, date):
        return format_legacy_date(value)
    if isinstance(value, list):
        return ",".join(value)
    return str(value)


class LegacyEntry(BaseModel):
    """Base for legacy write payloads; fields are emitted in declaration order."""

    ALWAYS_EMITTED: ClassVar[frozenset[str]] = frozenset({"status", "comments"})

    def xml_fields(self) -> list[tuple[str, str]]:
        """Return the (element, text) pairs that make up the entry."""
        pairs: list[tuple[str, str]] = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if name in self.ALWAYS_EMITTED:
                if value is None:
                    continue
            elif not value:
                continue
            pairs.append((name, _xml_text(value)))
        return pairs

    def to_xml(self) -> str:
        """Serialize as an ``entry`` element without an XML prolog.

        Raises:
            RequestConstructionError: If a value cannot be represented in XML.
        """
        root = ET.Element("entry")
        for name, text in self.xml_fields():
            if _INVALID_XML_CHARS.search(text):
                raise RequestConstructionError(f"{name} contains characters not allowed in XML")
            ET.SubElement(root, name).text = text
        return ET.tostring(root, encoding="unicode", short_empty_elements=False)


class AnimeEntry(LegacyEntry):
    """Values an anime gets on the list when added or updated.

    ``status`` is required by the server: either a string such as
    ``"watching"`` or a :class:`~malclient.constants.LegacyStatus`.
    Dates are sent as MMDDYYYY; tags are comma-joined.
    """

    ALWAYS_EMITTED: ClassVar[frozenset[str]] = frozenset(
        {"status", "comments", "enable_rewatching"}
    )

    episode: int = 0
    status: str | int | None = None
    score: int = 0
    downloaded_episodes: int = 0
    storage_type: int = 0
    storage_value: float = 0.0
    times_rewatched: int = 0
    rewatch_value: int = 0
    date_start: date | str | None = None
    date_finish: date | str | None = None
    priority: int = 0
    enable_discussion: int = 0
    enable_rewatching: int | None = None
    comments: str | None = None
    fansub_group: str = ""
    tags: list[str] | str = ""


class MangaEntry(LegacyEntry):
    """Values a manga gets on the list when added or updated."""

    ALWAYS_EMITTED: ClassVar[frozenset[str]] = frozenset(
        {"status", "comments", "enable_rereading"}
    )

    volume: int = 0
    chapter: int = 0
    status: str | int | None = None
    score: int = 0
    downloaded_chapters: int = 0
    times_reread: int = 0
    reread_value: int = 0
    date_start: date | str | None = None
    date_finish: date | str | None = None
    priority: int = 0
    enable_discussion: int = 0
    enable_rereading: int | None = None
    comments: str | None = None
    scan_group: str = ""
    tags: list[str] | str = ""
    retail_volumes: int = 0
