"""Adapter layer package for the job service transport boundary."""

from .errors import (
	JobClientContractViolationError,
	JobClientError,
	JobClientInvalidArgumentError,
	JobClientPreconditionError,
	JobClientRemoteRejectionError,
	JobClientTimeoutError,
	JobClientTransportError,
)
from .http_transport import HttpxTransport, TransportByteStream
from .interfaces import TransportMultipartPart, TransportPort, TransportResponse, TransportStreamResponse

__all__ = [
	"HttpxTransport",
	"JobClientContractViolationError",
	"JobClientError",
	"JobClientInvalidArgumentError",
	"JobClientPreconditionError",
	"JobClientRemoteRejectionError",
	"JobClientTimeoutError",
	"JobClientTransportError",
	"TransportByteStream",
	"TransportMultipartPart",
	"TransportPort",
	"TransportResponse",
	"TransportStreamResponse",
]
