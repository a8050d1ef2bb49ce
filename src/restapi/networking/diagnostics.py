"""Opt-in request/response diagnostics.

Diagnostics are a side channel: lines go to an injected sink, and nothing
here may fail the call being described.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from .types import RequestSpec, ResponseEnvelope

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[str], None]

NO_BODY = "<no body>"


def logging_sink(line: str) -> None:
    """Default sink: write the line to this module's logger at DEBUG."""
    logger.debug("%s", line)


def _body_text(body: bytes | None) -> str:
    if body is None:
        return NO_BODY
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return f"<non-text body: {len(body)} bytes>"


def _format_mapping(mapping: Mapping[str, object]) -> str:
    return repr(dict(mapping))


def _emit(sink: DiagnosticSink, build: Callable[[], list[str]]) -> None:
    # Formatting runs under the same guard as the sink.
    try:
        for line in build():
            sink(line)
    except Exception:
        logger.warning("diagnostics failed", exc_info=True)


def describe_request(request: RequestSpec, sink: DiagnosticSink) -> None:
    """Emit verb, URL, headers and body of an outgoing request."""
    _emit(
        sink,
        lambda: [
            f"Request Verb: {request.verb.value}",
            f"Request URL: {request.url}",
            f"Request Headers: {_format_mapping(request.headers)}",
            f"Request Body: {_body_text(request.body)}",
        ],
    )


def describe_response(
    response: ResponseEnvelope, sink: DiagnosticSink
) -> None:
    """Emit the metadata and body text of a received response."""
    _emit(
        sink,
        lambda: [
            f"Response: {_format_mapping(response.metadata)}",
            f"Response Body: {_body_text(response.content)}",
        ],
    )
