"""Typed interfaces for the HTTP transport boundary."""

from dataclasses import dataclass, field
from typing import BinaryIO, Mapping, Protocol, Sequence


@dataclass(frozen=True)
class TransportResponse:
    """Fully read HTTP response returned by the transport port.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers with lower-cased names.
        body: Raw response body bytes.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        """Return whether the status code is in the 2xx range."""

        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class TransportStreamResponse:
    """Streamed HTTP response whose body has not been consumed yet.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers with lower-cased names.
        stream: Single-owner binary stream over the response body.
    """

    status_code: int
    headers: Mapping[str, str]
    stream: BinaryIO

    @property
    def is_success(self) -> bool:
        """Return whether the status code is in the 2xx range."""

        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class TransportMultipartPart:
    """One named part of a multipart/form-data request body.

    Attributes:
        name: Form field name.
        filename: Optional file name advertised for the part.
        content: Part bytes or an open binary file handle.
        content_type: MIME type advertised for the part.
    """

    name: str
    filename: str | None
    content: bytes | BinaryIO
    content_type: str


class TransportPort(Protocol):
    """Port definition for executing HTTP requests against the job service."""

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
            JobClientTransportError: Raised when the network call cannot complete.
        """

    def transport_open_stream(self, method: str, path: str) -> TransportStreamResponse:
        """Execute one request and return the response with an unread body stream.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the service base URL.

        Returns:
            TransportStreamResponse: Status, headers and body stream.

        Raises:
            JobClientTransportError: Raised when the network call cannot complete.
        """

    def transport_close(self) -> None:
        """Release pooled connections held by the transport."""
