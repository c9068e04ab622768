"""Typed representation of JSON documents returned by the service.

Responses are decoded once into a small tagged union (``JsonNull``,
``JsonBool``, ``JsonNumber``, ``JsonString``, ``JsonArray``, ``JsonObject``)
and then walked through accessors that fail with ``ResponseShapeError``
naming the offending path, instead of blind casts.

Example:
    doc = parse_json('{"results": {"job_id": "J1"}}')
    results = doc.expect_object().get("results")
    job_id = results.expect_object("$.results").get("job_id").stringify()
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
import json
from types import MappingProxyType
from typing import Any, ClassVar, TypeAlias

from blitline.errors import ResponseParseError, ResponseShapeError


class _JsonBase:
    """Accessors shared by every JSON value kind."""

    kind: ClassVar[str]

    def to_python(self) -> Any:
        raise NotImplementedError

    def stringify(self) -> str:
        """Render the value as text.

        Strings come back verbatim; every other kind becomes compact JSON.
        """
        return json.dumps(self.to_python(), separators=(",", ":"), ensure_ascii=False)

    def expect_object(self, path: str = "$") -> JsonObject:
        if isinstance(self, JsonObject):
            return self
        raise _shape_error(path, expected=JsonObject.kind, actual=self.kind)

    def expect_array(self, path: str = "$") -> JsonArray:
        if isinstance(self, JsonArray):
            return self
        raise _shape_error(path, expected=JsonArray.kind, actual=self.kind)


@dataclass(frozen=True)
class JsonNull(_JsonBase):
    kind: ClassVar[str] = "null"

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class JsonBool(_JsonBase):
    kind: ClassVar[str] = "boolean"

    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class JsonNumber(_JsonBase):
    kind: ClassVar[str] = "number"

    value: int | float

    def to_python(self) -> int | float:
        return self.value


@dataclass(frozen=True)
class JsonString(_JsonBase):
    kind: ClassVar[str] = "string"

    value: str

    def to_python(self) -> str:
        return self.value

    def stringify(self) -> str:
        return self.value


@dataclass(frozen=True)
class JsonArray(_JsonBase):
    kind: ClassVar[str] = "array"

    items: tuple[JsonValue, ...] = ()

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> JsonValue:
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JsonObject(_JsonBase):
    """A JSON object; member order follows the source document."""

    kind: ClassVar[str] = "object"

    members: Mapping[str, JsonValue] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def get(self, key: str) -> JsonValue | None:
        return self.members.get(key)

    def items(self) -> Iterator[tuple[str, JsonValue]]:
        return iter(self.members.items())

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members.items()}


JsonValue: TypeAlias = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject

JSON_NULL = JsonNull()


def _shape_error(path: str, *, expected: str, actual: str) -> ResponseShapeError:
    return ResponseShapeError(
        f"Expected {expected} at {path}, got {actual}",
        path=path,
        expected=expected,
        actual=actual,
        hint="The service response format may have changed.",
    )


def from_python(obj: Any) -> JsonValue:
    """Convert decoded JSON (``json.loads`` output) into a ``JsonValue``."""
    match obj:
        case None:
            return JSON_NULL
        case bool():
            return JsonBool(obj)
        case int() | float():
            return JsonNumber(obj)
        case str():
            return JsonString(obj)
        case list() | tuple():
            return JsonArray(tuple(from_python(item) for item in obj))
        case dict():
            members: dict[str, JsonValue] = {}
            for key, value in obj.items():
                if not isinstance(key, str):
                    raise TypeError(f"JSON object keys must be str, got {type(key).__name__}")
                members[key] = from_python(value)
            return JsonObject(MappingProxyType(members))
        case _:
            raise TypeError(f"Not a JSON value: {type(obj).__name__}")


def parse_json(text: str | bytes) -> JsonValue:
    """Decode *text* into a ``JsonValue``.

    Raises:
        ResponseParseError: *text* is empty or not valid JSON.
    """
    try:
        return from_python(json.loads(text))
    except (ValueError, RecursionError) as e:
        raise ResponseParseError(f"Response body is not valid JSON: {e}") from e
