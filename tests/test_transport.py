# pyright: reportUnknownParameterType=false, reportUnknownMemberType=false
# pyright: reportUnknownVariableType=false, reportMissingParameterType=false
# pyright: reportUnknownArgumentType=false
import asyncio
from unittest.mock import Mock, patch

import pytest
import requests

from restapi.networking.client import RestClient
from restapi.networking.config import TransportConfig
from restapi.networking.errors import TransportError
from restapi.networking.transport import RequestsTransport
from restapi.networking.types import RequestSpec, Verb


@pytest.fixture
def config():
    return TransportConfig(user_agent="TestAgent/1.0", timeout_seconds=5.0)


@pytest.fixture
def transport(config):
    return RequestsTransport(config)


def _mock_response(
    *,
    content: bytes = b"",
    status: int = 200,
    url: str = "http://example.com",
    reason: str = "OK",
):
    response = Mock()
    response.content = content
    response.status_code = status
    response.url = url
    response.reason = reason
    response.elapsed.total_seconds.return_value = 0.1
    response.headers = {"Content-Type": "application/json"}
    return response


def _send(transport, request):
    return asyncio.run(transport.send(request))


def test_init_sets_user_agent(transport):
    assert transport._session.headers["User-Agent"] == "TestAgent/1.0"


@patch("requests.Session.request")
def test_send_returns_content_and_metadata(mock_request, transport):
    mock_request.return_value = _mock_response(content=b'"hello"')
    request = RequestSpec(
        verb=Verb.GET,
        url="http://example.com",
        headers={"Accept": "application/json"},
    )

    response = _send(transport, request)

    assert response.content == b'"hello"'
    assert response.metadata["method"] == "GET"
    assert response.metadata["url"] == "http://example.com"
    assert response.metadata["status_code"] == 200
    assert response.metadata["reason"] == "OK"
    assert response.metadata["headers"] == {"Content-Type": "application/json"}
    assert response.metadata["elapsed_s"] == 0.1
    mock_request.assert_called_once_with(
        "GET",
        "http://example.com",
        headers={"Accept": "application/json"},
        data=None,
        timeout=5.0,
        allow_redirects=True,
        verify=True,
    )


@patch("requests.Session.request")
def test_send_passes_body_and_transport_settings(mock_request):
    transport = RequestsTransport(
        TransportConfig(
            verify_tls=False,
            allow_redirects=False,
            connect_timeout_seconds=1.0,
            read_timeout_seconds=3.0,
        )
    )
    mock_request.return_value = _mock_response(status=201, reason="Created")
    request = RequestSpec(
        verb=Verb.POST, url="http://example.com/todos", body=b'{"a":1}'
    )

    response = _send(transport, request)

    assert response.metadata["status_code"] == 201
    mock_request.assert_called_once_with(
        "POST",
        "http://example.com/todos",
        headers={},
        data=b'{"a":1}',
        timeout=(1.0, 3.0),
        allow_redirects=False,
        verify=False,
    )


@pytest.mark.parametrize(
    ("status", "reason"),
    [(404, "Not Found"), (500, "Internal Server Error"), (302, "Found")],
)
@patch("requests.Session.request")
def test_error_statuses_are_returned_not_raised(
    mock_request, transport, status, reason
):
    mock_request.return_value = _mock_response(
        content=b"oops", status=status, reason=reason
    )

    response = _send(transport, RequestSpec(verb=Verb.GET, url="http://e.com"))

    assert response.content == b"oops"
    assert response.metadata["status_code"] == status
    assert response.metadata["reason"] == reason


@patch("requests.Session.request")
def test_requests_exceptions_propagate(mock_request, transport):
    mock_request.side_effect = requests.exceptions.Timeout("Timed out")

    with pytest.raises(requests.exceptions.Timeout):
        _send(transport, RequestSpec(verb=Verb.GET, url="http://e.com"))

    assert mock_request.call_count == 1


@patch("requests.Session.request")
def test_client_wraps_requests_exceptions(mock_request, transport):
    mock_request.side_effect = requests.exceptions.ConnectionError("refused")
    client = RestClient(str, transport=transport)

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(client.get(url="http://example.com", resource_id="1"))

    assert isinstance(excinfo.value.cause, requests.exceptions.ConnectionError)
    assert mock_request.call_count == 1


@patch("requests.Session.request")
def test_client_decodes_through_requests_transport(mock_request, transport):
    mock_request.return_value = _mock_response(content=b'["a", "b"]')
    client = RestClient(str, transport=transport)

    assert asyncio.run(client.get(url="http://example.com")) == ["a", "b"]
    assert mock_request.call_args.args == ("GET", "http://example.com/")


def test_close_closes_session():
    session = Mock()
    session.headers = {}
    transport = RequestsTransport(session=session)

    transport.close()

    session.close.assert_called_once_with()
