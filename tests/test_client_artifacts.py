"""Regression tests for success-gated job output access."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from jobclient.adapters import (
    JobClientContractViolationError,
    JobClientInvalidArgumentError,
    JobClientPreconditionError,
    JobClientRemoteRejectionError,
    JobClientTransportError,
)
from jobclient.client import JobArtifactClient, JobStatusClient


class _BrokenOutputStream(io.BytesIO):
    """Output stream that fails with a transport error once its first chunk is read."""

    def read(self, size: int | None = -1) -> bytes:
        chunk = super().read(size)
        if not chunk:
            raise JobClientTransportError("Job service stream read failed")
        return chunk


def _build_client(recording_transport, **limits: int) -> JobArtifactClient:
    return JobArtifactClient(
        transport=recording_transport,
        status_client=JobStatusClient(transport=recording_transport),
        **limits,
    )


@pytest.mark.parametrize("status_literal", ["RUNNING", "INIT", "FAILED", "KILLED"])
@pytest.mark.parametrize("operation_name", ["artifact_get_stdout", "artifact_get_stderr"])
def test_client_artifacts_non_succeeded_job_fails_precondition(
    recording_transport, status_literal: str, operation_name: str
) -> None:
    """Refuse output of jobs that did not succeed before any output fetch.

    Args:
        recording_transport: Recording transport stub fixture.
        status_literal: Current job status returned by the service.
        operation_name: Artifact client method under test.

    Returns:
        None: Assertions validate the success-only gate.

    Raises:
        AssertionError: Raised when output is fetched for a non-succeeded job.
    """

    recording_transport.queue_json({"status": status_literal})
    client = _build_client(recording_transport)

    with pytest.raises(JobClientPreconditionError, match="successfully completed"):
        getattr(client, operation_name)("abc-123")

    assert recording_transport.stream_requests == []
    assert [request["path"] for request in recording_transport.requests] == ["jobs/abc-123/status"]


def test_client_artifacts_succeeded_job_fetches_stdout_once(recording_transport) -> None:
    """Fetch a fresh status, then issue exactly one stdout fetch and return its stream.

    Args:
        recording_transport: Recording transport stub fixture.

    Returns:
        None: Assertions validate stream hand-over.

    Raises:
        AssertionError: Raised when the output fetch count or stream is wrong.
    """

    recording_transport.queue_json({"status": "SUCCEEDED"})
    served_stream = recording_transport.queue_stream(b"hello\nworld\n")
    client = _build_client(recording_transport)

    with client.artifact_get_stdout("abc-123") as stream:
        assert stream is served_stream
        assert stream.read() == b"hello\nworld\n"

    assert served_stream.closed
    assert recording_transport.stream_requests == [("GET", "jobs/abc-123/output/stdout")]


def test_client_artifacts_succeeded_job_fetches_stderr_path(recording_transport) -> None:
    """Route stderr requests to the stderr output resource."""

    recording_transport.queue_json({"status": "SUCCEEDED"})
    recording_transport.queue_stream(b"warning: deprecated flag\n")
    client = _build_client(recording_transport)

    with client.artifact_get_stderr("abc-123") as stream:
        assert stream.read() == b"warning: deprecated flag\n"

    assert recording_transport.stream_requests == [("GET", "jobs/abc-123/output/stderr")]


def test_client_artifacts_rejected_output_fetch_closes_stream(recording_transport) -> None:
    """Close the stream and raise a rejection when the output fetch is not 2xx.

    Args:
        recording_transport: Recording transport stub fixture.

    Returns:
        None: Assertions validate rejection handling and release.

    Raises:
        AssertionError: Raised when the rejected stream is leaked.
    """

    recording_transport.queue_json({"status": "SUCCEEDED"})
    served_stream = recording_transport.queue_stream(b"archived output not found", status_code=404)
    client = _build_client(recording_transport)

    with pytest.raises(JobClientRemoteRejectionError) as error_info:
        client.artifact_get_stdout("abc-123")

    assert error_info.value.status_code == 404
    assert error_info.value.response_body == b"archived output not found"
    assert served_stream.closed


def test_client_artifacts_download_copies_in_chunks(recording_transport, tmp_path: Path) -> None:
    """Copy output to disk chunk by chunk and report the byte count.

    Args:
        recording_transport: Recording transport stub fixture.
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate the copied file.

    Raises:
        AssertionError: Raised when the copy is incomplete.
    """

    payload = b"x" * 10_000
    recording_transport.queue_json({"status": "SUCCEEDED"})
    served_stream = recording_transport.queue_stream(payload)
    client = JobArtifactClient(
        transport=recording_transport,
        status_client=JobStatusClient(transport=recording_transport),
        chunk_size_bytes=4096,
    )
    destination = tmp_path / "stdout.log"

    bytes_written = client.artifact_download_stdout("abc-123", destination)

    assert bytes_written == 10_000
    assert destination.read_bytes() == payload
    assert served_stream.closed


def test_client_artifacts_download_over_limit_is_contract_violation(recording_transport, tmp_path: Path) -> None:
    """Stop copying and close the stream when output exceeds the configured limit.

    Args:
        recording_transport: Recording transport stub fixture.
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate the size bound.

    Raises:
        AssertionError: Raised when oversized output is accepted.
    """

    recording_transport.queue_json({"status": "SUCCEEDED"})
    served_stream = recording_transport.queue_stream(b"e" * 64)
    client = JobArtifactClient(
        transport=recording_transport,
        status_client=JobStatusClient(transport=recording_transport),
        max_stderr_bytes=40,
        chunk_size_bytes=16,
    )
    destination = tmp_path / "stderr.log"

    with pytest.raises(JobClientContractViolationError, match="40 bytes"):
        client.artifact_download_stderr("abc-123", destination)

    assert served_stream.closed
    assert not destination.exists()


def test_client_artifacts_download_stream_failure_removes_partial_file(recording_transport, tmp_path: Path) -> None:
    """Remove the partially written file when the stream fails mid-copy.

    Args:
        recording_transport: Recording transport stub fixture.
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate cleanup after a transport failure.

    Raises:
        AssertionError: Raised when a truncated file is left behind.
    """

    recording_transport.queue_json({"status": "SUCCEEDED"})
    served_stream = recording_transport.queue_stream(_BrokenOutputStream(b"first chunk"))
    client = _build_client(recording_transport)
    destination = tmp_path / "stdout.log"

    with pytest.raises(JobClientTransportError, match="stream read failed"):
        client.artifact_download_stdout("abc-123", destination)

    assert served_stream.closed
    assert not destination.exists()


@pytest.mark.parametrize(
    "operation_name",
    ["artifact_get_stdout", "artifact_get_stderr", "artifact_download_stdout", "artifact_download_stderr"],
)
@pytest.mark.parametrize("job_id", ["", "   ", None])
def test_client_artifacts_blank_job_id_fails_before_network(
    recording_transport, tmp_path: Path, operation_name: str, job_id
) -> None:
    """Reject blank identifiers on every output operation without network I/O.

    Args:
        recording_transport: Recording transport stub fixture.
        tmp_path: Pytest temporary directory fixture.
        operation_name: Artifact client method under test.
        job_id: Blank identifier candidate.

    Returns:
        None: Assertions validate identifier precondition.

    Raises:
        AssertionError: Raised when a status or output request is sent.
    """

    client = _build_client(recording_transport)
    operation = getattr(client, operation_name)
    destination = tmp_path / "output.log"

    with pytest.raises(JobClientInvalidArgumentError, match="job_id"):
        if operation_name.startswith("artifact_download"):
            operation(job_id, destination)
        else:
            operation(job_id)

    assert recording_transport.requests == []
    assert recording_transport.stream_requests == []
    assert not destination.exists()


def test_client_artifacts_rejects_non_positive_limits(recording_transport) -> None:
    """Reject output limits below one byte."""

    with pytest.raises(ValueError, match="max_stdout_bytes"):
        _build_client(recording_transport, max_stdout_bytes=0)
