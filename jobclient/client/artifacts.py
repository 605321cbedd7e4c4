"""Artifact access client for job standard output and standard error streams."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Final

from jobclient.adapters.errors import (
    JobClientContractViolationError,
    JobClientPreconditionError,
    JobClientRemoteRejectionError,
)
from jobclient.adapters.interfaces import TransportPort
from jobclient.config.logging_config import config_get_logger
from jobclient.config.settings import JOB_OUTPUT_MAX_BYTES_DEFAULT
from jobclient.domain.models import JobStatus

from .common import client_build_job_path, client_require_job_id
from .status import JobStatusClient

logger = config_get_logger(__name__)


class JobArtifactClient:
    """Component client for job output streams gated on successful completion."""

    _STDOUT: Final[str] = "stdout"
    _STDERR: Final[str] = "stderr"
    _REJECTION_BODY_PREVIEW_BYTES: Final[int] = 64 * 1024

    def __init__(
        self,
        transport: TransportPort,
        status_client: JobStatusClient,
        max_stdout_bytes: int = JOB_OUTPUT_MAX_BYTES_DEFAULT,
        max_stderr_bytes: int = JOB_OUTPUT_MAX_BYTES_DEFAULT,
        chunk_size_bytes: int = 1024 * 1024,
    ):
        """Initialize the artifact client.

        Args:
            transport: Transport used for output fetches.
            status_client: Status client used for the success precondition.
            max_stdout_bytes: Largest stdout size the service stores.
            max_stderr_bytes: Largest stderr size the service stores.
            chunk_size_bytes: Read size used when copying output to disk.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when limits or chunk size are not positive.
        """

        if max_stdout_bytes < 1:
            raise ValueError("max_stdout_bytes must be >= 1")
        if max_stderr_bytes < 1:
            raise ValueError("max_stderr_bytes must be >= 1")
        if chunk_size_bytes < 1:
            raise ValueError("chunk_size_bytes must be >= 1")

        self._transport = transport
        self._status_client = status_client
        self._max_output_bytes = {self._STDOUT: max_stdout_bytes, self._STDERR: max_stderr_bytes}
        self._chunk_size_bytes = chunk_size_bytes

    def artifact_get_stdout(self, job_id: str) -> BinaryIO:
        """Open the stdout stream of a successfully completed job.

        The caller owns the returned stream and must close it, preferably with
        a `with` block.

        Args:
            job_id: Job identifier.

        Returns:
            BinaryIO: Single-owner stream over the job's stdout.

        Raises:
            JobClientInvalidArgumentError: Raised when the identifier is blank.
            JobClientPreconditionError: Raised when the job status is not SUCCEEDED.
            JobClientTransportError: Raised when the network call cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects the output fetch.
        """

        return self._artifact_open_output(job_id, output_name=self._STDOUT)

    def artifact_get_stderr(self, job_id: str) -> BinaryIO:
        """Open the stderr stream of a successfully completed job; see `artifact_get_stdout`."""

        return self._artifact_open_output(job_id, output_name=self._STDERR)

    def artifact_download_stdout(self, job_id: str, destination: str | Path) -> int:
        """Copy the stdout of a successfully completed job to a local file.

        Args:
            job_id: Job identifier.
            destination: Local file path written in binary mode.

        Returns:
            int: Number of bytes written.

        Raises:
            JobClientPreconditionError: Raised when the job status is not SUCCEEDED.
            JobClientContractViolationError: Raised when the stream exceeds the configured stdout limit.
            JobClientTransportError: Raised when the stream fails mid-copy; the partial file is removed.
        """

        return self._artifact_download(job_id, output_name=self._STDOUT, destination=Path(destination))

    def artifact_download_stderr(self, job_id: str, destination: str | Path) -> int:
        """Copy the stderr of a successfully completed job to a local file; see `artifact_download_stdout`."""

        return self._artifact_download(job_id, output_name=self._STDERR, destination=Path(destination))

    def _artifact_open_output(self, job_id: str, output_name: str) -> BinaryIO:
        """Check the success precondition, then open one output stream.

        Args:
            job_id: Job identifier.
            output_name: `stdout` or `stderr`.

        Returns:
            BinaryIO: Open output stream owned by the caller.

        Raises:
            JobClientPreconditionError: Raised before any output request when the job did not succeed.
            JobClientRemoteRejectionError: Raised for non-2xx output responses.
        """

        normalized_job_id = client_require_job_id(job_id)
        status = self._status_client.status_get(normalized_job_id)
        if status is not JobStatus.SUCCEEDED:
            logger.info(
                "job_output_precondition_failed",
                job_id=normalized_job_id,
                output_name=output_name,
                status=status.value,
            )
            raise JobClientPreconditionError(
                f"Cannot request {output_name} of job {normalized_job_id} whose status is {status.value}; "
                "output is only available for successfully completed jobs."
            )

        stream_response = self._transport.transport_open_stream(
            "GET",
            client_build_job_path(normalized_job_id, "output", output_name),
        )
        if not stream_response.is_success:
            try:
                body_preview = stream_response.stream.read(self._REJECTION_BODY_PREVIEW_BYTES) or b""
            finally:
                stream_response.stream.close()
            raise JobClientRemoteRejectionError(
                f"Job service rejected job {output_name} fetch: HTTP {stream_response.status_code}",
                status_code=stream_response.status_code,
                response_body=body_preview,
            )

        logger.debug("job_output_opened", job_id=normalized_job_id, output_name=output_name)
        return stream_response.stream

    def _artifact_download(self, job_id: str, output_name: str, destination: Path) -> int:
        max_output_bytes = self._max_output_bytes[output_name]
        bytes_written = 0
        stream = self._artifact_open_output(job_id, output_name=output_name)
        with stream:
            target_file = destination.open("wb")
            try:
                with target_file:
                    while True:
                        chunk = stream.read(self._chunk_size_bytes)
                        if not chunk:
                            break
                        bytes_written += len(chunk)
                        if bytes_written > max_output_bytes:
                            raise JobClientContractViolationError(
                                f"Job {output_name} exceeds the configured limit of {max_output_bytes} bytes"
                            )
                        target_file.write(chunk)
            except BaseException:
                # no partial output is left at destination
                destination.unlink(missing_ok=True)
                logger.warning(
                    "job_output_download_failed",
                    job_id=job_id.strip(),
                    output_name=output_name,
                    destination=str(destination),
                    bytes_read=bytes_written,
                )
                raise

        logger.info(
            "job_output_downloaded",
            job_id=job_id.strip(),
            output_name=output_name,
            destination=str(destination),
            bytes_written=bytes_written,
        )
        return bytes_written
