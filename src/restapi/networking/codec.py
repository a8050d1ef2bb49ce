"""Codec interface and the default pydantic-backed JSON codec."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


class Codec(Protocol):
    """Converts between typed values and raw body bytes."""

    def encode(self, value: Any) -> bytes:
        """Serialize ``value``; raise if it cannot be serialized."""
        ...

    def decode(self, data: bytes, target_type: type[T]) -> T:
        """Deserialize ``data`` into ``target_type``; raise on mismatch."""
        ...


@lru_cache(maxsize=None)
def _adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


class JsonCodec:
    """JSON codec for any type pydantic can validate.

    Builtins, ``list[...]``, dataclasses and ``BaseModel`` subclasses all
    work as resource types. Decoding is strict by default: JSON whose shape
    does not match the target type fails instead of being coerced.
    """

    def __init__(
        self,
        *,
        strict: bool = True,
        by_alias: bool = True,
        exclude_none: bool = False,
    ) -> None:
        self._strict = strict
        self._by_alias = by_alias
        self._exclude_none = exclude_none

    def encode(self, value: Any) -> bytes:
        return _adapter(type(value)).dump_json(
            value, by_alias=self._by_alias, exclude_none=self._exclude_none
        )

    def decode(self, data: bytes, target_type: type[T]) -> T:
        return _adapter(target_type).validate_json(data, strict=self._strict)
