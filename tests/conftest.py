# pyright: reportUnknownParameterType=false, reportMissingParameterType=false
from __future__ import annotations

import json
from typing import Callable

import pytest

from restapi.networking.client import RestClient
from restapi.networking.types import RequestSpec, ResponseEnvelope, Verb

Responder = Callable[[RequestSpec], "bytes | BaseException"]


def collection_or_single(request: RequestSpec) -> bytes:
    """Answer a GET on "/" with a list and everything else with a scalar."""
    if request.verb is Verb.GET and request.url == "/":
        return json.dumps(["Success"]).encode()
    return json.dumps("Success").encode()


class StubTransport:
    """Transport double that records every request it is handed."""

    def __init__(self) -> None:
        self.requests: list[RequestSpec] = []
        self.closed = False
        self._responder: Responder = collection_or_single

    def respond_with(self, answer: bytes | BaseException | Responder) -> None:
        if callable(answer):
            self._responder = answer
        else:
            self._responder = lambda _request: answer

    async def send(self, request: RequestSpec) -> ResponseEnvelope:
        self.requests.append(request)
        answer = self._responder(request)
        if isinstance(answer, BaseException):
            raise answer
        return ResponseEnvelope(
            content=answer,
            metadata={"status_code": 200, "url": request.url},
        )

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> RequestSpec:
        return self.requests[-1]


@pytest.fixture
def stub():
    return StubTransport()


@pytest.fixture
def client(stub):
    return RestClient(str, transport=stub)
