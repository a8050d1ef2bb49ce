"""Value types that flow through the RestClient pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, TypeAlias

JsonValue: TypeAlias = (
    "None | bool | int | float | str | list[JsonValue] | dict[str, JsonValue]"
)
JsonObject: TypeAlias = "dict[str, JsonValue]"


class Verb(str, Enum):
    """HTTP verbs supported by RestClient."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def _frozen(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RequestSpec:
    """A fully built request, owned by a single call."""

    verb: Verb
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _frozen(self.headers))

    def with_body(self, body: bytes | None) -> RequestSpec:
        """Return a copy of this request carrying ``body``."""
        return replace(self, body=body)


@dataclass(frozen=True)
class ResponseEnvelope:
    """Raw response bytes plus opaque transport metadata.

    The metadata is only ever displayed by diagnostics; RestClient never
    branches on it.
    """

    content: bytes
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _frozen(self.metadata))
