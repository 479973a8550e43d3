"""JSON serialization policy shared by request bodies and response bodies.

Rules applied in both directions:

* property names are camelCase on the wire (snake_case attributes in memory);
* enum members travel as their symbolic NAME, never as their value;
* datetimes are UTC: naive values are taken as UTC, aware values converted.

Resource shapes derive from :class:`ResourceModel`, which carries the rules in
its pydantic config and validators. :class:`SerializationPolicy` is the codec
the client calls; it can be swapped per client instance.
"""

from __future__ import annotations

import enum
import functools
import types
import typing
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    TypeAdapter,
    ValidationInfo,
    field_validator,
    model_serializer,
)
from pydantic.alias_generators import to_camel
from pydantic_core import from_json, to_json

from resource_client.errors import SerializationError

T = TypeVar("T")

_SEQUENCE_ORIGINS = (list, set, frozenset, tuple)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC; naive values are assumed to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _contains_model(value: Any) -> bool:
    if isinstance(value, BaseModel):
        return True
    if isinstance(value, dict):
        return any(_contains_model(v) for v in value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(_contains_model(v) for v in value)
    return False


def _has_wire_values(value: Any) -> bool:
    if isinstance(value, (enum.Enum, datetime)):
        return True
    if isinstance(value, dict):
        return any(_has_wire_values(k) or _has_wire_values(v) for k, v in value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(_has_wire_values(v) for v in value)
    return False


def to_wire(value: Any) -> Any:
    """Replace enum members by their names and datetimes by UTC datetimes.

    Enum dict keys are renamed too. Models are left alone: they apply the
    same rules when they serialize.
    """
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, dict):
        return {to_wire(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_wire(v) for v in value]
    return value


def members_from_names(annotation: Any, value: Any) -> Any:
    """Turn enum member names in ``value`` into members, guided by ``annotation``.

    Strings that are not a member name are passed through untouched, so
    pydantic still gets the chance to match them against member values.
    """
    if value is None:
        return value

    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        if isinstance(value, str) and value in annotation.__members__:
            return annotation[value]
        return value

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return members_from_names(args[0], value)

    if origin is typing.Union or origin is types.UnionType:
        for arg in args:
            if arg is type(None):
                continue
            converted = members_from_names(arg, value)
            if converted is not value:
                return converted
        return value

    if origin in _SEQUENCE_ORIGINS and isinstance(value, (list, tuple)):
        if not args:
            return value
        if origin is tuple and args[-1] is not Ellipsis:
            # Fixed-shape tuple: one annotation per position
            return [members_from_names(a, v) for a, v in zip(args, value)] + list(
                value[len(args):]
            )
        return [members_from_names(args[0], v) for v in value]

    if origin is dict and isinstance(value, dict) and len(args) == 2:
        return {
            members_from_names(args[0], k): members_from_names(args[1], v)
            for k, v in value.items()
        }

    return value


def _utc_datetimes(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, list):
        return [_utc_datetimes(v) for v in value]
    if isinstance(value, tuple):
        return tuple(_utc_datetimes(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return type(value)(_utc_datetimes(v) for v in value)
    if isinstance(value, dict):
        return {k: _utc_datetimes(v) for k, v in value.items()}
    return value


class ResourceModel(BaseModel):
    """Base class for every shape exchanged with the resource service.

    Subclasses declare snake_case fields; the wire uses camelCase. Both
    spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _enum_members_from_names(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name) if info.field_name else None
        if field is None:
            return value
        return members_from_names(field.annotation, value)

    @field_validator("*", mode="after")
    @classmethod
    def _datetimes_as_utc(cls, value: Any) -> Any:
        return _utc_datetimes(value)

    @model_serializer(mode="wrap")
    def _serialize_wire_values(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        if not info.mode_is_json():
            return data

        for name, field in type(self).model_fields.items():
            key = field.alias if field.alias in data else name
            if key not in data:
                continue
            raw = getattr(self, name)
            if _has_wire_values(raw) and not _contains_model(raw):
                data[key] = to_wire(raw)
        return data


@functools.lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)


class SerializationPolicy:
    """Encodes values to JSON text and decodes JSON text into typed values."""

    def serialize(self, value: Any) -> str:
        """Encode ``value`` as camelCase, enum-by-name, UTC JSON text.

        Raises
        ------
        TypeError
            If ``value`` is a pydantic model that does not derive from
            :class:`ResourceModel` and so would bypass the wire rules.
        """
        if isinstance(value, ResourceModel):
            return value.model_dump_json(by_alias=True)
        if isinstance(value, BaseModel):
            raise TypeError(
                f"{type(value).__name__} must derive from ResourceModel to be serialized"
            )
        return to_json(to_wire(value), by_alias=True).decode("utf-8")

    def deserialize(self, text: str | bytes, type_: type[T]) -> T | None:
        """Decode JSON text into ``type_``.

        Empty input decodes to ``None``.

        Raises
        ------
        SerializationError
            If the text is not valid JSON or does not fit ``type_``.
        """
        if not text or not text.strip():
            return None

        try:
            data = from_json(text)
            result = _adapter(type_).validate_python(members_from_names(type_, data))
        except ValueError as exc:
            raise SerializationError(
                f"Cannot decode response body as {_type_name(type_)}: {exc}"
            ) from exc

        return _utc_datetimes(result)


default_policy = SerializationPolicy()
