"""Configuration models for RestClient and its default transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def _default_headers() -> Mapping[str, str]:
    """Return the immutable JSON content negotiation headers."""

    return MappingProxyType(
        {"Content-Type": JSON_CONTENT_TYPE, "Accept": JSON_CONTENT_TYPE}
    )


@dataclass(frozen=True)
class RestClientConfig:
    """Per-client defaults applied to every request.

    ``base_url`` and ``base_path`` are joined with a single ``/`` unless a
    call overrides either of them.
    """

    base_url: str = ""
    base_path: str = ""
    default_headers: Mapping[str, str] = field(default_factory=_default_headers)
    debug: bool = False

    def __post_init__(self) -> None:
        for key, value in self.default_headers.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError("default_headers keys and values must be str")

        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(
            self,
            "default_headers",
            MappingProxyType(dict(self.default_headers)),
        )


@dataclass(frozen=True)
class TransportConfig:
    """Configuration for RequestsTransport."""

    user_agent: str | None = None
    verify_tls: bool = True
    allow_redirects: bool = True
    connect_timeout_seconds: float | None = None
    read_timeout_seconds: float | None = None
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        has_connect_timeout = self.connect_timeout_seconds is not None
        has_read_timeout = self.read_timeout_seconds is not None
        if has_connect_timeout != has_read_timeout:
            raise ValueError(
                "connect_timeout_seconds and read_timeout_seconds "
                "must be set together"
            )
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when provided")
        if (
            self.connect_timeout_seconds is not None
            and self.connect_timeout_seconds <= 0
        ):
            raise ValueError(
                "connect_timeout_seconds must be > 0 when provided"
            )
        if (
            self.read_timeout_seconds is not None
            and self.read_timeout_seconds <= 0
        ):
            raise ValueError("read_timeout_seconds must be > 0 when provided")

    def resolve_timeout(self) -> float | tuple[float, float] | None:
        """Return the timeout argument passed to requests."""
        if (
            self.connect_timeout_seconds is not None
            and self.read_timeout_seconds is not None
        ):
            return (self.connect_timeout_seconds, self.read_timeout_seconds)
        return self.timeout_seconds
