"""Error types raised by the RestClient pipeline."""

from __future__ import annotations


class RestApiError(Exception):
    """Base class for every failure surfaced by RestClient."""


class InvalidUrlError(RestApiError):
    """The assembled URL is not a valid URI reference."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"invalid url {url!r}: {reason}")
        self.url = url
        self.reason = reason


class _WrappedError(RestApiError):
    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(f"{message}: {cause}")
        self.cause = cause


class EncodeError(_WrappedError):
    """The request body could not be serialized."""


class TransportError(_WrappedError):
    """The transport failed to deliver the request or read the response."""


class DecodeError(_WrappedError):
    """The response body does not match the requested type."""
