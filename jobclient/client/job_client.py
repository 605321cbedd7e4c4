"""Facade exposing every job service operation through one client object."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable, Mapping, Sequence

from jobclient.adapters.interfaces import TransportPort
from jobclient.config.settings import JOB_OUTPUT_MAX_BYTES_DEFAULT
from jobclient.domain.models import Application, Cluster, Command, Job, JobExecution, JobRequest, JobStatus

from .artifacts import JobArtifactClient
from .completion import JobCompletionWaiter
from .query import JobQueryClient
from .status import JobStatusClient
from .submission import JobSubmissionClient


class JobClient:
    """Client library for the job service.

    Composes the submission, query, status, artifact and completion-wait
    component clients over one shared transport. Use as a context manager to
    release pooled connections on exit.
    """

    def __init__(
        self,
        transport: TransportPort,
        default_block_timeout_seconds: float = 3600.0,
        default_poll_interval_seconds: float = 10.0,
        max_stdout_bytes: int = JOB_OUTPUT_MAX_BYTES_DEFAULT,
        max_stderr_bytes: int = JOB_OUTPUT_MAX_BYTES_DEFAULT,
        sleep_provider: Callable[[float], None] | None = None,
        monotonic_provider: Callable[[], float] | None = None,
    ):
        """Initialize the facade and its component clients.

        Args:
            transport: Shared transport for every component client.
            default_block_timeout_seconds: Completion-wait budget used when none is given.
            default_poll_interval_seconds: Completion-wait poll interval used when none is given.
            max_stdout_bytes: Upper bound applied when copying stdout to disk.
            max_stderr_bytes: Upper bound applied when copying stderr to disk.
            sleep_provider: Optional sleep override for the completion waiter.
            monotonic_provider: Optional clock override for the completion waiter.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when default durations are negative or limits are not positive.
        """

        if default_block_timeout_seconds < 0:
            raise ValueError("default_block_timeout_seconds must be >= 0")
        if default_poll_interval_seconds < 0:
            raise ValueError("default_poll_interval_seconds must be >= 0")

        self._transport = transport
        self._default_block_timeout_seconds = default_block_timeout_seconds
        self._default_poll_interval_seconds = default_poll_interval_seconds
        self._submission_client = JobSubmissionClient(transport=transport)
        self._query_client = JobQueryClient(transport=transport)
        self._status_client = JobStatusClient(transport=transport)
        self._artifact_client = JobArtifactClient(
            transport=transport,
            status_client=self._status_client,
            max_stdout_bytes=max_stdout_bytes,
            max_stderr_bytes=max_stderr_bytes,
        )
        self._completion_waiter = JobCompletionWaiter(
            status_client=self._status_client,
            sleep_provider=sleep_provider,
            monotonic_provider=monotonic_provider,
        )

    def __enter__(self) -> JobClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.job_close()

    def job_close(self) -> None:
        """Release pooled connections held by the transport."""

        self._transport.transport_close()

    def job_submit(self, request: JobRequest) -> str:
        """Submit a job and return its identifier."""

        return self._submission_client.submission_submit(request)

    def job_submit_with_attachments(self, request: JobRequest, file_paths: Sequence[str] | None = None) -> str:
        """Submit a job with file attachments and return its identifier."""

        return self._submission_client.submission_submit_with_attachments(request, file_paths=file_paths)

    def job_list(self, filters: Mapping[str, str] | None = None) -> list[Job]:
        """List jobs matching optional query filters."""

        return self._query_client.query_list_jobs(filters=filters)

    def job_get(self, job_id: str) -> Job:
        return self._query_client.query_get_job(job_id)

    def job_get_cluster(self, job_id: str) -> Cluster:
        return self._query_client.query_get_job_cluster(job_id)

    def job_get_command(self, job_id: str) -> Command:
        return self._query_client.query_get_job_command(job_id)

    def job_get_request(self, job_id: str) -> JobRequest:
        return self._query_client.query_get_job_request(job_id)

    def job_get_execution(self, job_id: str) -> JobExecution:
        return self._query_client.query_get_job_execution(job_id)

    def job_get_applications(self, job_id: str) -> list[Application]:
        return self._query_client.query_get_job_applications(job_id)

    def job_get_status(self, job_id: str) -> JobStatus:
        return self._status_client.status_get(job_id)

    def job_kill(self, job_id: str) -> None:
        """Send a kill request without waiting for the job to stop."""

        self._status_client.status_kill(job_id)

    def job_get_stdout(self, job_id: str) -> BinaryIO:
        """Open the stdout stream of a SUCCEEDED job; the caller closes it."""

        return self._artifact_client.artifact_get_stdout(job_id)

    def job_get_stderr(self, job_id: str) -> BinaryIO:
        """Open the stderr stream of a SUCCEEDED job; the caller closes it."""

        return self._artifact_client.artifact_get_stderr(job_id)

    def job_download_stdout(self, job_id: str, destination: str | Path) -> int:
        return self._artifact_client.artifact_download_stdout(job_id, destination)

    def job_download_stderr(self, job_id: str, destination: str | Path) -> int:
        return self._artifact_client.artifact_download_stderr(job_id, destination)

    def job_wait_for_completion(
        self,
        job_id: str,
        block_timeout_seconds: float | None = None,
        poll_interval_seconds: float | None = None,
    ) -> JobStatus:
        """Block until the job is terminal or the wait budget is spent.

        Args:
            job_id: Job identifier.
            block_timeout_seconds: Wait budget; defaults to the configured budget.
            poll_interval_seconds: Poll interval; defaults to the configured interval.

        Returns:
            JobStatus: Terminal job status.

        Raises:
            JobClientTimeoutError: Raised when the budget is spent first.
        """

        return self._completion_waiter.completion_wait(
            job_id,
            block_timeout_seconds=(
                self._default_block_timeout_seconds if block_timeout_seconds is None else block_timeout_seconds
            ),
            poll_interval_seconds=(
                self._default_poll_interval_seconds if poll_interval_seconds is None else poll_interval_seconds
            ),
        )
