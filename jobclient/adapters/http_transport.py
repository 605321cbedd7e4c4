"""httpx-backed transport adapter for the job service HTTP API."""

from __future__ import annotations

import io
from typing import Callable, Final, Iterator, Mapping, Sequence

import httpx

from jobclient.config.logging_config import config_get_logger

from .errors import JobClientTransportError
from .interfaces import TransportMultipartPart, TransportResponse, TransportStreamResponse

logger = config_get_logger(__name__)


class TransportByteStream(io.RawIOBase):
    """Read-only binary stream over a streamed HTTP response body.

    The stream owns the underlying response. Closing the stream releases the
    connection back to the pool; reading never buffers more than one chunk.
    """

    def __init__(self, chunks: Iterator[bytes], on_close: Callable[[], None]):
        super().__init__()
        self._chunks = chunks
        self._on_close = on_close
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        """Fill `buffer` from the pending chunk, pulling the next chunk when empty.

        Args:
            buffer: Writable buffer supplied by the io machinery.

        Returns:
            int: Number of bytes written, 0 at end of stream.

        Raises:
            JobClientTransportError: Raised when the connection fails mid-body.
        """

        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
            except (httpx.TransportError, httpx.StreamError) as error:
                raise JobClientTransportError("Job service stream read failed") from error

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if not self.closed:
            try:
                self._on_close()
            finally:
                super().close()


class HttpxTransport:
    """Transport adapter executing job service requests through one pooled `httpx.Client`."""

    _DEFAULT_USER_AGENT: Final[str] = "jobclient/1.0 (Python/httpx)"

    def __init__(
        self,
        base_url: str,
        request_timeout_seconds: float = 30.0,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the transport adapter.

        Args:
            base_url: Base URL of the job service API, for example `https://host/api/v3`.
            request_timeout_seconds: Per-request timeout in seconds.
            user_agent: Optional User-Agent header override.
            transport: Optional httpx transport, used to inject mock transports.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_base_url = base_url.strip()
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._base_url = normalized_base_url.rstrip("/") + "/"
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=request_timeout_seconds,
            headers={"User-Agent": (user_agent or self._DEFAULT_USER_AGENT).strip()},
            transport=transport,
        )

    def transport_request(
        self,
        method: str,
        path: str,
        query_parameters: Mapping[str, str] | None = None,
        json_payload: object | None = None,
        multipart_parts: Sequence[TransportMultipartPart] | None = None,
    ) -> TransportResponse:
        """Execute one request and return the fully read response.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the service base URL.
            query_parameters: Optional query string parameters.
            json_payload: Optional JSON-serializable body.
            multipart_parts: Optional multipart body parts.

        Returns:
            TransportResponse: Status, headers and body of the response.

        Raises:
            JobClientTransportError: Raised for connection, timeout and protocol failures.
        """

        request_files = None
        if multipart_parts is not None:
            request_files = [
                (part.name, (part.filename, part.content, part.content_type)) for part in multipart_parts
            ]

        try:
            response = self._client.request(
                method,
                path.lstrip("/"),
                params=dict(query_parameters) if query_parameters else None,
                json=json_payload,
                files=request_files,
            )
        except httpx.TimeoutException as error:
            raise JobClientTransportError(f"Job service request timed out: {method} {path}") from error
        except httpx.TransportError as error:
            raise JobClientTransportError(f"Job service request failed: {method} {path}") from error

        logger.debug("transport_response", method=method, path=path, status_code=response.status_code)
        return TransportResponse(
            status_code=response.status_code,
            headers=self._transport_normalize_headers(response.headers),
            body=bytes(response.content),
        )

    def transport_open_stream(self, method: str, path: str) -> TransportStreamResponse:
        """Execute one request and hand back the unread response body as a stream.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the service base URL.

        Returns:
            TransportStreamResponse: Status, headers and single-owner body stream.

        Raises:
            JobClientTransportError: Raised for connection, timeout and protocol failures.
        """

        try:
            request = self._client.build_request(method, path.lstrip("/"))
            response = self._client.send(request, stream=True)
        except httpx.TimeoutException as error:
            raise JobClientTransportError(f"Job service request timed out: {method} {path}") from error
        except httpx.TransportError as error:
            raise JobClientTransportError(f"Job service request failed: {method} {path}") from error

        logger.debug("transport_stream_opened", method=method, path=path, status_code=response.status_code)
        return TransportStreamResponse(
            status_code=response.status_code,
            headers=self._transport_normalize_headers(response.headers),
            stream=TransportByteStream(chunks=response.iter_bytes(), on_close=response.close),
        )

    def transport_close(self) -> None:
        """Close the pooled HTTP client."""

        self._client.close()

    def _transport_normalize_headers(self, headers: httpx.Headers) -> dict[str, str]:
        return {name.lower(): value for name, value in headers.items()}
