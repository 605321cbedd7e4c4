"""Job query client for job details, related entities and filtered listings."""

from __future__ import annotations

from typing import Callable, Mapping, TypeVar

from jobclient.adapters.interfaces import TransportPort
from jobclient.config.logging_config import config_get_logger
from jobclient.domain.models import Application, Cluster, Command, Job, JobExecution, JobRequest
from jobclient.mapping.response_mapper import (
    mapping_build_application_list,
    mapping_build_cluster,
    mapping_build_command,
    mapping_build_job,
    mapping_build_job_execution,
    mapping_build_job_list,
    mapping_build_job_request,
)

from .common import (
    JOBS_COLLECTION_PATH,
    client_build_job_path,
    client_decode_json,
    client_require_job_id,
    client_require_success,
)

logger = config_get_logger(__name__)

_RecordT = TypeVar("_RecordT")


class JobQueryClient:
    """Component client for read-only job lookups.

    Every operation is one fetch-and-deserialize round trip with no retry and no
    caching; two calls with no server-side change in between return equal values.
    """

    def __init__(self, transport: TransportPort):
        self._transport = transport

    def query_list_jobs(self, filters: Mapping[str, str] | None = None) -> list[Job]:
        """List jobs visible to the caller, optionally constrained by filters.

        Args:
            filters: Query constraints passed through unmodified as query parameters.

        Returns:
            list[Job]: Jobs in the order the service returned them.

        Raises:
            JobClientTransportError: Raised when the network call cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects the query.
            JobClientContractViolationError: Raised when any listed record is malformed.
        """

        query_parameters = dict(filters) if filters else None
        response = client_require_success(
            self._transport.transport_request("GET", JOBS_COLLECTION_PATH, query_parameters=query_parameters),
            operation="job listing",
        )
        jobs = mapping_build_job_list(client_decode_json(response, operation="job listing"))
        logger.debug("jobs_listed", filter_keys=sorted(query_parameters or {}), job_count=len(jobs))
        return jobs

    def query_get_job(self, job_id: str) -> Job:
        """Fetch one job.

        Args:
            job_id: Job identifier.

        Returns:
            Job: Current job record.

        Raises:
            JobClientInvalidArgumentError: Raised when the identifier is blank.
            JobClientTransportError: Raised when the network call cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects the lookup.
            JobClientContractViolationError: Raised when the body is missing or malformed.
        """

        return self._query_fetch(job_id, segment=None, builder=mapping_build_job)

    def query_get_job_cluster(self, job_id: str) -> Cluster:
        """Fetch the cluster the job runs on."""

        return self._query_fetch(job_id, segment="cluster", builder=mapping_build_cluster)

    def query_get_job_command(self, job_id: str) -> Command:
        """Fetch the command the job runs."""

        return self._query_fetch(job_id, segment="command", builder=mapping_build_command)

    def query_get_job_request(self, job_id: str) -> JobRequest:
        """Fetch the request the job was created from."""

        return self._query_fetch(job_id, segment="request", builder=mapping_build_job_request)

    def query_get_job_execution(self, job_id: str) -> JobExecution:
        """Fetch the execution record of the job."""

        return self._query_fetch(job_id, segment="execution", builder=mapping_build_job_execution)

    def query_get_job_applications(self, job_id: str) -> list[Application]:
        """Fetch the applications available to the job's command."""

        return self._query_fetch(job_id, segment="applications", builder=mapping_build_application_list)

    def _query_fetch(
        self,
        job_id: str,
        segment: str | None,
        builder: Callable[[object], _RecordT],
    ) -> _RecordT:
        """Validate the identifier, fetch one job resource and map its body.

        Args:
            job_id: Job identifier.
            segment: Optional sub-resource name below `jobs/{id}`.
            builder: Mapping function applied to the decoded body.

        Returns:
            _RecordT: Mapped domain record.

        Raises:
            JobClientInvalidArgumentError: Raised when the identifier is blank.
            JobClientRemoteRejectionError: Raised for non-2xx responses.
            JobClientContractViolationError: Raised when the body is missing or malformed.
        """

        normalized_job_id = client_require_job_id(job_id)
        path = client_build_job_path(normalized_job_id, *((segment,) if segment else ()))
        operation = f"job {segment or 'lookup'}"
        response = client_require_success(self._transport.transport_request("GET", path), operation=operation)
        return builder(client_decode_json(response, operation=operation))
