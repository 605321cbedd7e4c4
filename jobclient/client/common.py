"""Shared request helpers used by every job service component client."""

from __future__ import annotations

import json
from typing import Final
from urllib.parse import quote

from jobclient.adapters.errors import (
    JobClientContractViolationError,
    JobClientInvalidArgumentError,
    JobClientRemoteRejectionError,
)
from jobclient.adapters.interfaces import TransportResponse

JOBS_COLLECTION_PATH: Final[str] = "jobs"


def client_require_job_id(job_id: str | None) -> str:
    """Validate a caller-supplied job identifier before any network call.

    Args:
        job_id: Candidate job identifier.

    Returns:
        str: Identifier with surrounding whitespace removed.

    Raises:
        JobClientInvalidArgumentError: Raised when the identifier is missing or blank.
    """

    if not isinstance(job_id, str) or not job_id.strip():
        raise JobClientInvalidArgumentError("Missing required parameter: job_id.")
    return job_id.strip()


def client_build_job_path(job_id: str, *segments: str) -> str:
    """Build a job resource path such as `jobs/{id}/status`.

    Args:
        job_id: Validated job identifier; quoted as one path segment.
        segments: Trailing path segments.

    Returns:
        str: Relative resource path.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return "/".join((JOBS_COLLECTION_PATH, quote(job_id, safe=""), *segments))


def client_require_success(response: TransportResponse, operation: str) -> TransportResponse:
    """Raise a remote rejection for any non-2xx response.

    Args:
        response: Transport response to check.
        operation: Operation label used in the error message.

    Returns:
        TransportResponse: The same response when successful.

    Raises:
        JobClientRemoteRejectionError: Raised when the status code is outside 2xx.
    """

    if not response.is_success:
        raise JobClientRemoteRejectionError(
            f"Job service rejected {operation}: HTTP {response.status_code}",
            status_code=response.status_code,
            response_body=response.body,
        )
    return response


def client_decode_json(response: TransportResponse, operation: str) -> object:
    """Decode a success response body as JSON.

    Args:
        response: Successful transport response.
        operation: Operation label used in the error message.

    Returns:
        object: Decoded JSON value.

    Raises:
        JobClientContractViolationError: Raised when the body is empty or not valid JSON.
    """

    if not response.body.strip():
        raise JobClientContractViolationError(f"Job service returned an empty body for {operation}")
    try:
        return json.loads(response.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise JobClientContractViolationError(f"Job service returned invalid JSON for {operation}") from error
