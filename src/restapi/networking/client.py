"""Generic asynchronous REST client.

One RestClient serves one resource type. Every call assembles a URL from the
client defaults and per-call overrides, layers headers, encodes an optional
body, awaits the transport once and decodes the response.
"""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar, overload

from .codec import Codec, JsonCodec
from .config import RestClientConfig
from .diagnostics import (
    DiagnosticSink,
    describe_request,
    describe_response,
    logging_sink,
)
from .errors import DecodeError, EncodeError, TransportError
from .transport import RequestsTransport, Transport
from .types import JsonObject, RequestSpec, ResponseEnvelope, Verb
from .urls import build_url

R = TypeVar("R")
T = TypeVar("T")


class RestClient(Generic[R]):
    """REST client bound to a single resource type.

    Reads (``get``) surface every failure, including a response body that
    does not decode into the resource type. Writes (``post``, ``put``,
    ``patch``, ``delete``) return the echoed resource when the response
    decodes and ``None`` when it does not; the write itself already happened.
    """

    def __init__(
        self,
        resource_type: type[R],
        config: RestClientConfig | None = None,
        *,
        transport: Transport | None = None,
        codec: Codec | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        """Create a new RestClient.

        Args:
            resource_type: Type responses are decoded into.
            config: Base URL, base path, default headers and debug flag.
            transport: Sends requests. When omitted the client creates a
                RequestsTransport and closes it in ``aclose``; an injected
                transport is never closed by the client.
            codec: Encodes bodies and decodes responses; JsonCodec by
                default.
            sink: Receives diagnostic lines when debug is active; the
                ``restapi.networking.diagnostics`` logger by default.
        """
        self._resource_type = resource_type
        self._config = config or RestClientConfig()
        self._owned_transport: RequestsTransport | None = None
        if transport is None:
            transport = self._owned_transport = RequestsTransport()
        self._transport: Transport = transport
        self._codec: Codec = codec or JsonCodec()
        self._sink = sink or logging_sink

    @property
    def config(self) -> RestClientConfig:
        return self._config

    @property
    def resource_type(self) -> type[R]:
        return self._resource_type

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owned_transport is not None:
            self._owned_transport.close()

    async def __aenter__(self) -> RestClient[R]:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _build_url(
        self,
        url: str | None,
        path: str | None,
        resource_id: str | None,
        suffix: str | None,
        params: Mapping[str, str] | None,
    ) -> str:
        return build_url(
            self._config.base_url if url is None else url,
            self._config.base_path if path is None else path,
            resource_id=resource_id,
            suffix=suffix,
            params=params,
        )

    def _build_request(
        self, url: str, verb: Verb, headers: Mapping[str, str] | None
    ) -> RequestSpec:
        merged = dict(self._config.default_headers)
        if headers:
            merged.update(headers)
        return RequestSpec(verb=verb, url=url, headers=merged)

    def _encode_body(
        self, resource: R | None, payload: JsonObject | None
    ) -> bytes | None:
        value: Any = resource if resource is not None else payload
        if value is None:
            return None
        try:
            return self._codec.encode(value)
        except Exception as exc:
            raise EncodeError("could not encode request body", exc) from exc

    def _decode(self, data: bytes, target_type: type[T]) -> T:
        try:
            return self._codec.decode(data, target_type)
        except Exception as exc:
            raise DecodeError(
                f"could not decode response as {target_type!r}", exc
            ) from exc

    async def _dispatch(
        self, request: RequestSpec, debug: bool | None
    ) -> ResponseEnvelope:
        active = self._config.debug if debug is None else debug
        if active:
            describe_request(request, self._sink)
        try:
            response = await self._transport.send(request)
        except Exception as exc:
            raise TransportError(
                f"{request.verb.value} {request.url} failed", exc
            ) from exc
        if active:
            describe_response(response, self._sink)
        return response

    async def _write(
        self,
        verb: Verb,
        *,
        url: str | None,
        path: str | None,
        resource_id: str | None,
        suffix: str | None,
        params: Mapping[str, str] | None,
        resource: R | None,
        payload: JsonObject | None,
        headers: Mapping[str, str] | None,
        debug: bool | None,
        decode: bool,
    ) -> R | None:
        if resource is not None and payload is not None:
            raise ValueError("pass either resource or payload, not both")
        request = self._build_request(
            self._build_url(url, path, resource_id, suffix, params),
            verb,
            headers,
        )
        request = request.with_body(self._encode_body(resource, payload))
        response = await self._dispatch(request, debug)
        if not decode:
            return None
        try:
            return self._decode(response.content, self._resource_type)
        except DecodeError:
            return None

    @overload
    async def get(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        resource_id: None = None,
        suffix: str | None = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
    ) -> list[R]: ...

    @overload
    async def get(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        resource_id: str,
        suffix: str | None = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
    ) -> R: ...

    async def get(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        resource_id: str | None = None,
        suffix: str | None = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
    ) -> list[R] | R:
        """Perform an HTTP GET request.

        Without ``resource_id`` the response is decoded as a list of
        resources; with it, as a single resource.

        Args:
            url: Replaces the configured base URL for this call.
            path: Replaces the configured base path for this call.
            resource_id: Appended to the path as its own segment.
            suffix: Appended verbatim after the path and resource id.
            params: Query parameters; replace any query already in the URL.
            headers: Per-call headers layered over the default headers.
            debug: Overrides the configured debug flag for this call.

        Returns:
            The decoded resource, or list of resources.

        Raises:
            InvalidUrlError: The assembled URL is not valid.
            TransportError: The transport failed.
            DecodeError: The response does not decode into the target type.
        """
        target: Any = (
            list[self._resource_type]
            if resource_id is None
            else self._resource_type
        )
        request = self._build_request(
            self._build_url(url, path, resource_id, suffix, params),
            Verb.GET,
            headers,
        )
        response = await self._dispatch(request, debug)
        return self._decode(response.content, target)

    async def post(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        suffix: str | None = None,
        params: Mapping[str, str] | None = None,
        resource: R | None = None,
        payload: JsonObject | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
        decode: bool = True,
    ) -> R | None:
        """Perform an HTTP POST request.

        Args:
            url: Replaces the configured base URL for this call.
            path: Replaces the configured base path for this call.
            suffix: Appended verbatim after the path.
            params: Query parameters; replace any query already in the URL.
            resource: Typed body, encoded through the codec.
            payload: Untyped JSON object body; exclusive with ``resource``.
            headers: Per-call headers layered over the default headers.
            debug: Overrides the configured debug flag for this call.
            decode: When False the response body is ignored.

        Returns:
            The echoed resource, or None when the response does not decode
            or ``decode`` is False.

        Raises:
            InvalidUrlError: The assembled URL is not valid.
            EncodeError: The body could not be encoded.
            TransportError: The transport failed.
        """
        return await self._write(
            Verb.POST,
            url=url,
            path=path,
            resource_id=None,
            suffix=suffix,
            params=params,
            resource=resource,
            payload=payload,
            headers=headers,
            debug=debug,
            decode=decode,
        )

    async def put(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        resource_id: str | None = None,
        suffix: str | None = None,
        params: Mapping[str, str] | None = None,
        resource: R | None = None,
        payload: JsonObject | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
        decode: bool = True,
    ) -> R | None:
        """Perform an HTTP PUT request.

        Arguments and failures are those of ``post``; ``resource_id`` is
        appended to the path as its own segment.
        """
        return await self._write(
            Verb.PUT,
            url=url,
            path=path,
            resource_id=resource_id,
            suffix=suffix,
            params=params,
            resource=resource,
            payload=payload,
            headers=headers,
            debug=debug,
            decode=decode,
        )

    async def patch(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        resource_id: str | None = None,
        suffix: str | None = None,
        params: Mapping[str, str] | None = None,
        resource: R | None = None,
        payload: JsonObject | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
        decode: bool = True,
    ) -> R | None:
        """Perform an HTTP PATCH request. See ``put``."""
        return await self._write(
            Verb.PATCH,
            url=url,
            path=path,
            resource_id=resource_id,
            suffix=suffix,
            params=params,
            resource=resource,
            payload=payload,
            headers=headers,
            debug=debug,
            decode=decode,
        )

    async def delete(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        resource_id: str | None = None,
        suffix: str | None = None,
        params: Mapping[str, str] | None = None,
        resource: R | None = None,
        payload: JsonObject | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
        decode: bool = True,
    ) -> R | None:
        """Perform an HTTP DELETE request. See ``put``."""
        return await self._write(
            Verb.DELETE,
            url=url,
            path=path,
            resource_id=resource_id,
            suffix=suffix,
            params=params,
            resource=resource,
            payload=payload,
            headers=headers,
            debug=debug,
            decode=decode,
        )
