"""Regression tests for the httpx transport adapter."""

from __future__ import annotations

import json
from typing import Iterator

import httpx

import pytest

from jobclient.adapters import HttpxTransport, JobClientTransportError, TransportMultipartPart
import jobclient.adapters.http_transport as transport_module


class _FailingByteStream(httpx.SyncByteStream):
    """Response body that fails after the first chunk."""

    def __iter__(self) -> Iterator[bytes]:
        yield b"partial"
        raise httpx.ReadError("connection reset by peer")


def _build_transport(handler, base_url: str = "https://svc.example/api/v3") -> HttpxTransport:
    return HttpxTransport(base_url=base_url, user_agent="jobclient-tests/1.0", transport=httpx.MockTransport(handler))


def test_adapters_http_transport_joins_paths_under_base_url() -> None:
    """Resolve relative paths beneath the base URL path and send parameters and JSON.

    Returns:
        None: Assertions validate the outgoing request.

    Raises:
        AssertionError: Raised when URL joining or body encoding is wrong.
    """

    seen_requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen_requests.append(request)
        return httpx.Response(202, headers={"Location": "https://svc.example/api/v3/jobs/abc-123"})

    transport = _build_transport(_handler)

    response = transport.transport_request(
        "POST",
        "/jobs",
        query_parameters={"status": "RUNNING"},
        json_payload={"name": "nightly"},
    )

    assert response.status_code == 202
    assert response.is_success
    assert response.headers["location"] == "https://svc.example/api/v3/jobs/abc-123"
    sent_request = seen_requests[0]
    assert sent_request.method == "POST"
    assert sent_request.url.path == "/api/v3/jobs"
    assert sent_request.url.params["status"] == "RUNNING"
    assert sent_request.headers["user-agent"] == "jobclient-tests/1.0"
    assert json.loads(sent_request.content) == {"name": "nightly"}


def test_adapters_http_transport_trailing_slash_base_url_is_equivalent() -> None:
    """Treat base URLs with and without a trailing slash the same way."""

    seen_paths: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen_paths.append(request.url.path)
        return httpx.Response(200, json={"status": "RUNNING"})

    _build_transport(_handler, base_url="https://svc.example/api/v3/").transport_request("GET", "jobs/a/status")
    _build_transport(_handler, base_url="https://svc.example/api/v3").transport_request("GET", "jobs/a/status")

    assert seen_paths == ["/api/v3/jobs/a/status", "/api/v3/jobs/a/status"]


def test_adapters_http_transport_encodes_multipart_parts() -> None:
    """Encode the request part and attachment parts into one multipart body.

    Returns:
        None: Assertions validate the multipart wire layout.

    Raises:
        AssertionError: Raised when part names, filenames or types are missing.
    """

    seen_requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen_requests.append(request)
        return httpx.Response(202, headers={"Location": "/api/v3/jobs/job-42"})

    transport = _build_transport(_handler)

    transport.transport_request(
        "POST",
        "jobs",
        multipart_parts=[
            TransportMultipartPart(
                name="request",
                filename=None,
                content=b'{"name":"nightly"}',
                content_type="application/json",
            ),
            TransportMultipartPart(
                name="attachment",
                filename="query.hql",
                content=b"SELECT 1;",
                content_type="application/octet-stream",
            ),
        ],
    )

    sent_request = seen_requests[0]
    body = sent_request.content
    assert sent_request.headers["content-type"].startswith("multipart/form-data; boundary=")
    assert b'name="request"' in body
    assert b'{"name":"nightly"}' in body
    assert b'name="attachment"; filename="query.hql"' in body
    assert b"Content-Type: application/octet-stream" in body
    assert b"SELECT 1;" in body


def test_adapters_http_transport_returns_non_success_responses() -> None:
    """Return non-2xx responses to the caller instead of raising."""

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(404, content=b"no such job")

    response = _build_transport(_handler).transport_request("GET", "jobs/missing")

    assert response.status_code == 404
    assert not response.is_success
    assert response.body == b"no such job"


@pytest.mark.parametrize(
    ("raised_error", "message_fragment"),
    [
        (httpx.ReadTimeout("read timed out"), "timed out"),
        (httpx.ConnectError("connection refused"), "failed"),
    ],
)
def test_adapters_http_transport_maps_network_failures(raised_error: Exception, message_fragment: str) -> None:
    """Map httpx timeouts and connection failures to transport errors.

    Args:
        raised_error: httpx error raised by the mock transport.
        message_fragment: Expected fragment of the mapped error message.

    Returns:
        None: Assertions validate error mapping.

    Raises:
        AssertionError: Raised when httpx errors leak to the caller.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        raise raised_error

    transport = _build_transport(_handler)

    with pytest.raises(JobClientTransportError, match=message_fragment) as error_info:
        transport.transport_request("GET", "jobs/abc-123/status")
    with pytest.raises(JobClientTransportError):
        transport.transport_open_stream("GET", "jobs/abc-123/output/stdout")

    assert isinstance(error_info.value, ConnectionError)
    assert error_info.value.__cause__ is raised_error


def test_adapters_http_transport_request_timeout_from_client(monkeypatch: pytest.MonkeyPatch) -> None:
    """Map a timeout raised by the pooled client itself.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate timeout mapping behavior.

    Raises:
        AssertionError: Raised when timeout mapping is incorrect.
    """

    transport = HttpxTransport(base_url="https://svc.example/api/v3")

    def _raise_timeout(_self: object, method: str, url: str, **kwargs: object) -> httpx.Response:
        _ = (method, url, kwargs)
        raise httpx.TimeoutException("timed out")

    monkeypatch.setattr(transport_module.httpx.Client, "request", _raise_timeout)

    with pytest.raises(JobClientTransportError, match="timed out"):
        transport.transport_request("GET", "jobs")


def test_adapters_http_transport_stream_reads_then_releases_connection() -> None:
    """Hand back a readable stream that releases the response on close.

    Returns:
        None: Assertions validate stream contents and lifecycle.

    Raises:
        AssertionError: Raised when the stream is truncated or left open.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v3/jobs/abc-123/output/stdout"
        return httpx.Response(200, content=b"line one\nline two\n")

    stream_response = _build_transport(_handler).transport_open_stream("GET", "jobs/abc-123/output/stdout")

    assert stream_response.is_success
    with stream_response.stream as stream:
        assert stream.readline() == b"line one\n"
        assert stream.read() == b"line two\n"

    assert stream_response.stream.closed


def test_adapters_http_transport_stream_failure_mid_body_is_transport_error() -> None:
    """Surface a connection failure during a body read as a transport error.

    Returns:
        None: Assertions validate mid-stream error mapping.

    Raises:
        AssertionError: Raised when the httpx error leaks or data is lost.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, stream=_FailingByteStream())

    stream_response = _build_transport(_handler).transport_open_stream("GET", "jobs/abc-123/output/stderr")

    with stream_response.stream as stream:
        assert stream.read(1024) == b"partial"
        with pytest.raises(JobClientTransportError, match="stream read failed"):
            stream.read(1024)


def test_adapters_http_transport_rejects_invalid_configuration() -> None:
    """Reject blank base URLs and non-positive timeouts."""

    with pytest.raises(ValueError, match="base_url"):
        HttpxTransport(base_url="  ")
    with pytest.raises(ValueError, match="request_timeout_seconds"):
        HttpxTransport(base_url="https://svc.example", request_timeout_seconds=0)
