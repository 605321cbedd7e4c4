"""Shared in-memory transport stub for component client tests."""

from __future__ import annotations

import io
import json
from typing import BinaryIO, Mapping, Sequence

import pytest

from jobclient.adapters.interfaces import TransportMultipartPart, TransportResponse, TransportStreamResponse


class RecordingTransport:
    """Transport port stub that records every call and replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[dict[str, object]] = []
        self.stream_requests: list[tuple[str, str]] = []
        self.closed = False
        self._responses: list[TransportResponse] = []
        self._stream_responses: list[TransportStreamResponse] = []

    def queue_json(self, payload: object, status_code: int = 200) -> None:
        self._responses.append(
            TransportResponse(
                status_code=status_code,
                headers={"content-type": "application/json"},
                body=json.dumps(payload).encode("utf-8"),
            )
        )

    def queue_response(self, status_code: int, headers: Mapping[str, str] | None = None, body: bytes = b"") -> None:
        self._responses.append(TransportResponse(status_code=status_code, headers=dict(headers or {}), body=body))

    def queue_stream(self, body: bytes | BinaryIO, status_code: int = 200) -> BinaryIO:
        stream = io.BytesIO(body) if isinstance(body, bytes) else body
        self._stream_responses.append(TransportStreamResponse(status_code=status_code, headers={}, stream=stream))
        return stream

    def transport_request(
        self,
        method: str,
        path: str,
        query_parameters: Mapping[str, str] | None = None,
        json_payload: object | None = None,
        multipart_parts: Sequence[TransportMultipartPart] | None = None,
    ) -> TransportResponse:
        recorded_parts = None
        if multipart_parts is not None:
            recorded_parts = [
                (
                    part.name,
                    part.filename,
                    part.content if isinstance(part.content, bytes) else part.content.read(),
                    part.content_type,
                )
                for part in multipart_parts
            ]
        self.requests.append(
            {
                "method": method,
                "path": path,
                "query_parameters": dict(query_parameters) if query_parameters is not None else None,
                "json_payload": json_payload,
                "multipart_parts": recorded_parts,
            }
        )
        if not self._responses:
            raise AssertionError(f"unexpected request: {method} {path}")
        return self._responses.pop(0)

    def transport_open_stream(self, method: str, path: str) -> TransportStreamResponse:
        self.stream_requests.append((method, path))
        if not self._stream_responses:
            raise AssertionError(f"unexpected stream request: {method} {path}")
        return self._stream_responses.pop(0)

    def transport_close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """Return a fresh recording transport stub."""

    return RecordingTransport()
