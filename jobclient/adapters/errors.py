"""Project-native typed exceptions for job service client failures."""

from __future__ import annotations


class JobClientError(Exception):
    """Base exception for every job service client failure."""


class JobClientInvalidArgumentError(JobClientError, ValueError):
    """Caller supplied a blank identifier or a missing request; raised before network I/O."""


class JobClientTransportError(JobClientError, ConnectionError):
    """Network call could not complete (connection, timeout, or stream I/O failure)."""


class JobClientRemoteRejectionError(JobClientError):
    """Job service answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code returned by the service.
        response_body: Raw response body returned by the service.
    """

    def __init__(self, message: str, status_code: int, response_body: bytes = b""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    def response_text(self) -> str:
        """Return the response body decoded for diagnostics.

        Returns:
            str: UTF-8 decoded body with undecodable bytes replaced.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.response_body.decode("utf-8", errors="replace")


class JobClientContractViolationError(JobClientError, RuntimeError):
    """Success response body did not match the expected wire contract."""


class JobClientPreconditionError(JobClientError):
    """Domain precondition was not met, for example output of an unfinished job."""


class JobClientTimeoutError(JobClientError, TimeoutError):
    """Completion wait deadline elapsed before a terminal status was observed.

    Attributes:
        job_id: Identifier of the job being waited on.
        wait_state: Final completion-wait state label.
    """

    def __init__(self, message: str, job_id: str, wait_state: str = "TIMED_OUT"):
        super().__init__(message)
        self.job_id = job_id
        self.wait_state = wait_state
