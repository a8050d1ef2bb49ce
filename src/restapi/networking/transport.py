"""Transport interface and the default requests-based implementation.

The transport is the only place RestClient suspends: ``send`` is awaited
once per call and either returns the raw response or raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import requests

from .config import TransportConfig
from .types import RequestSpec, ResponseEnvelope

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Sends a built request and returns the raw response."""

    async def send(self, request: RequestSpec) -> ResponseEnvelope:
        """Deliver ``request``; raise a transport-defined error on failure."""
        ...


class RequestsTransport:
    """Transport over a ``requests.Session``.

    Each blocking exchange runs in the default thread pool so the event loop
    is never blocked. HTTP error statuses are not treated as failures: the
    body is returned like any other and the status lands in the metadata.
    Exceptions raised by requests propagate unchanged.
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        """Create a new RequestsTransport.

        Args:
            config: Timeouts, TLS and redirect settings.
            session: Optional pre-configured session; one is created when
                omitted.
        """
        self._config = config or TransportConfig()
        self._session = session or requests.Session()
        if self._config.user_agent:
            self._session.headers["User-Agent"] = self._config.user_agent

    @property
    def config(self) -> TransportConfig:
        return self._config

    def _build_meta(
        self, request: RequestSpec, response: requests.Response
    ) -> dict[str, Any]:
        """Construct metadata dictionary from the response."""
        meta: dict[str, Any] = {}
        meta["method"] = request.verb.value
        meta["url"] = response.url or request.url
        meta["status_code"] = response.status_code
        meta["reason"] = response.reason
        meta["headers"] = dict(response.headers)
        try:
            meta["elapsed_s"] = response.elapsed.total_seconds()
        except AttributeError:
            pass  # In case elapsed is not available or mocked
        return meta

    def _exchange(self, request: RequestSpec) -> ResponseEnvelope:
        logger.debug("%s %s", request.verb.value, request.url)
        response = self._session.request(
            request.verb.value,
            request.url,
            headers=dict(request.headers),
            data=request.body,
            timeout=self._config.resolve_timeout(),
            allow_redirects=self._config.allow_redirects,
            verify=self._config.verify_tls,
        )
        return ResponseEnvelope(
            content=response.content,
            metadata=self._build_meta(request, response),
        )

    async def send(self, request: RequestSpec) -> ResponseEnvelope:
        return await asyncio.to_thread(self._exchange, request)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()
