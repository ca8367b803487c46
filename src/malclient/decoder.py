"""Response decoding for the MyAnimeList client library.

Legacy endpoints answer in XML, modern endpoints in JSON. Both are decoded
into pydantic models; XML is first mapped onto a dict guided by the model's
fields and aliases.
"""

from __future__ import annotations

import types
import typing
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from pydantic import AliasChoices, BaseModel, ValidationError

from malclient.exceptions import DecodeError

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

    from malclient.transport import MALResponse

log: structlog.stdlib.BoundLogger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)

# The legacy API emits this HTML entity undeclared, which XML parsers reject.
BULL_ENTITY = b"&bull;"
BULL_REPLACEMENT = b"<![CDATA[&bull;]]>"


def fix_legacy_xml(body: bytes) -> bytes:
    """Return a copy of *body* with every ``&bull;`` wrapped in CDATA."""
    return body.replace(BULL_ENTITY, BULL_REPLACEMENT)


def _field_tags(name: str, field: FieldInfo) -> list[str]:
    """Element names that may carry a model field, in order of preference."""
    alias = field.validation_alias
    if isinstance(alias, AliasChoices):
        return [choice for choice in alias.choices if isinstance(choice, str)]
    if isinstance(alias, str):
        return [alias]
    return [field.alias or name]


def _unwrap(annotation: Any) -> tuple[bool, type[BaseModel] | None]:
    """Return (is_list, nested model) for a field annotation."""
    origin = typing.get_origin(annotation)
    if origin is list:
        (item,) = typing.get_args(annotation)
        return True, _unwrap(item)[1]
    if origin in (typing.Union, types.UnionType):
        for arg in typing.get_args(annotation):
            _, model = _unwrap(arg)
            if model is not None:
                return False, model
        return False, None
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return False, annotation
    return False, None


def _convert(element: ET.Element, model: type[BaseModel] | None) -> Any:
    if model is not None:
        return element_to_data(element, model)
    text = (element.text or "").strip()
    return text or None


def element_to_data(element: ET.Element, model: type[BaseModel]) -> dict[str, Any]:
    """Map the children of *element* onto a dict *model* can validate.

    Empty elements are left out so the model defaults apply.
    """
    data: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        for tag in _field_tags(name, field):
            children = element.findall(tag)
            if children:
                break
        else:
            continue

        is_list, nested = _unwrap(field.annotation)
        if is_list:
            values = [_convert(child, nested) for child in children]
            data[tag] = [value for value in values if value is not None]
        else:
            value = _convert(children[0], nested)
            if value is not None:
                data[tag] = value
    return data


def decode_xml(response: MALResponse, model: type[M]) -> M:
    """Decode a legacy XML response body into *model*.

    The ``&bull;`` fix-up is applied to a copy; ``response.body`` is untouched.

    Raises:
        DecodeError: If the body is not XML or does not fit the model.
    """
    try:
        root = ET.fromstring(fix_legacy_xml(response.body))
    except ET.ParseError as exc:
        log.debug("xml decode failed", url=response.url, error=str(exc))
        raise DecodeError(response, f"cannot decode XML: {exc}") from exc

    try:
        return model.model_validate(element_to_data(root, model))
    except ValidationError as exc:
        log.debug("xml validation failed", url=response.url, error=str(exc))
        raise DecodeError(response, f"cannot decode XML: {exc}") from exc


def decode_json(response: MALResponse, model: type[M]) -> M:
    """Decode a modern JSON response body into *model*.

    An empty body yields the model defaults.

    Raises:
        DecodeError: If the body is not JSON or does not fit the model.
    """
    body = response.body if response.body.strip() else b"{}"
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        log.debug("json decode failed", url=response.url, error=str(exc))
        raise DecodeError(response, f"cannot decode JSON: {exc}") from exc
