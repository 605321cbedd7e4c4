"""Completion waiter: bounded blocking wait for a job to reach a terminal status."""

from __future__ import annotations

import time
from typing import Callable

from jobclient.adapters.errors import JobClientInvalidArgumentError, JobClientTimeoutError
from jobclient.config.logging_config import config_get_logger
from jobclient.domain.models import CompletionWaitState, JobStatus

from .common import client_require_job_id
from .status import JobStatusClient

logger = config_get_logger(__name__)


class JobCompletionWaiter:
    """Poll job status at a fixed interval until it is terminal or the budget is spent.

    The wait moves from PENDING to DONE when a terminal status is observed and
    from PENDING to TIMED_OUT when the budget is spent. The elapsed time is
    checked after every status fetch and before the next sleep, so slow fetches
    count against the budget. A poll interval longer than the remaining budget
    still sleeps in full, so the wait can overshoot the deadline by up to one
    interval.
    """

    def __init__(
        self,
        status_client: JobStatusClient,
        sleep_provider: Callable[[float], None] | None = None,
        monotonic_provider: Callable[[], float] | None = None,
    ):
        """Initialize the completion waiter.

        Args:
            status_client: Status client used for every poll.
            sleep_provider: Optional blocking sleep, defaults to `time.sleep`.
            monotonic_provider: Optional monotonic clock in seconds, defaults to `time.monotonic`.

        Returns:
            None: Initializer does not return a value.

        Raises:
            RuntimeError: This initializer does not raise runtime errors.
        """

        self._status_client = status_client
        self._sleep_provider = sleep_provider or time.sleep
        self._monotonic_provider = monotonic_provider or time.monotonic

    def completion_wait(
        self,
        job_id: str,
        block_timeout_seconds: float,
        poll_interval_seconds: float,
    ) -> JobStatus:
        """Block until the job reaches a terminal status or the budget is spent.

        Args:
            job_id: Job identifier.
            block_timeout_seconds: Total wait budget measured from the call start.
            poll_interval_seconds: Sleep between consecutive status fetches.

        Returns:
            JobStatus: Terminal status (SUCCEEDED, FAILED or KILLED).

        Raises:
            JobClientInvalidArgumentError: Raised for a blank identifier or negative durations.
            JobClientTimeoutError: Raised when no terminal status was observed within the budget.
            JobClientTransportError: Raised when a status fetch cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects a status fetch.
            JobClientContractViolationError: Raised when a status response is malformed.
        """

        normalized_job_id = client_require_job_id(job_id)
        if block_timeout_seconds < 0:
            raise JobClientInvalidArgumentError("block_timeout_seconds must be >= 0")
        if poll_interval_seconds < 0:
            raise JobClientInvalidArgumentError("poll_interval_seconds must be >= 0")

        started_at = self._monotonic_provider()
        poll_count = 0

        while True:
            status = self._status_client.status_get(normalized_job_id)
            poll_count += 1
            if status.is_terminal:
                logger.info(
                    "job_wait_completed",
                    job_id=normalized_job_id,
                    status=status.value,
                    poll_count=poll_count,
                    wait_state=CompletionWaitState.DONE.value,
                )
                return status

            elapsed_seconds = self._monotonic_provider() - started_at
            if elapsed_seconds >= block_timeout_seconds:
                logger.warning(
                    "job_wait_timed_out",
                    job_id=normalized_job_id,
                    status=status.value,
                    poll_count=poll_count,
                    elapsed_seconds=elapsed_seconds,
                    wait_state=CompletionWaitState.TIMED_OUT.value,
                )
                raise JobClientTimeoutError(
                    f"Timed out waiting for job {normalized_job_id} to finish",
                    job_id=normalized_job_id,
                    wait_state=CompletionWaitState.TIMED_OUT.value,
                )

            logger.debug(
                "job_status_polled",
                job_id=normalized_job_id,
                status=status.value,
                poll_count=poll_count,
                elapsed_seconds=elapsed_seconds,
            )
            self._sleep_provider(poll_interval_seconds)
