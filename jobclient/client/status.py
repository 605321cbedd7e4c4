"""Job status client: current lifecycle state and kill requests."""

from __future__ import annotations

from jobclient.adapters.interfaces import TransportPort
from jobclient.config.logging_config import config_get_logger
from jobclient.domain.models import JobStatus
from jobclient.mapping.response_mapper import mapping_build_status

from .common import client_build_job_path, client_decode_json, client_require_job_id, client_require_success

logger = config_get_logger(__name__)


class JobStatusClient:
    """Component client for job lifecycle state."""

    def __init__(self, transport: TransportPort):
        self._transport = transport

    def status_get(self, job_id: str) -> JobStatus:
        """Fetch the current status of a job.

        Args:
            job_id: Job identifier.

        Returns:
            JobStatus: Status reported by the service at call time.

        Raises:
            JobClientInvalidArgumentError: Raised when the identifier is blank.
            JobClientTransportError: Raised when the network call cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects the lookup.
            JobClientContractViolationError: Raised for missing or unrecognized status values.
        """

        normalized_job_id = client_require_job_id(job_id)
        response = client_require_success(
            self._transport.transport_request("GET", client_build_job_path(normalized_job_id, "status")),
            operation="job status",
        )
        status = mapping_build_status(client_decode_json(response, operation="job status"))
        logger.debug("job_status_fetched", job_id=normalized_job_id, status=status.value)
        return status

    def status_kill(self, job_id: str) -> None:
        """Send a kill request without waiting for the resulting state transition.

        The response body is ignored; callers observe the transition through
        `status_get`.

        Args:
            job_id: Job identifier.

        Returns:
            None: The call completes once the request completes network-wise.

        Raises:
            JobClientInvalidArgumentError: Raised when the identifier is blank.
            JobClientTransportError: Raised when the network call cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects the kill request.
        """

        normalized_job_id = client_require_job_id(job_id)
        client_require_success(
            self._transport.transport_request("DELETE", client_build_job_path(normalized_job_id)),
            operation="job kill",
        )
        logger.info("job_kill_requested", job_id=normalized_job_id)
