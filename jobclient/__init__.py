"""Client library for a remote job-execution service."""

from .adapters import (
    HttpxTransport,
    JobClientContractViolationError,
    JobClientError,
    JobClientInvalidArgumentError,
    JobClientPreconditionError,
    JobClientRemoteRejectionError,
    JobClientTimeoutError,
    JobClientTransportError,
)
from .bootstrap import bootstrap_create_job_client
from .client import JobClient
from .domain import Application, Cluster, Command, Job, JobExecution, JobRequest, JobStatus

__all__ = [
    "Application",
    "Cluster",
    "Command",
    "HttpxTransport",
    "Job",
    "JobClient",
    "JobClientContractViolationError",
    "JobClientError",
    "JobClientInvalidArgumentError",
    "JobClientPreconditionError",
    "JobClientRemoteRejectionError",
    "JobClientTimeoutError",
    "JobClientTransportError",
    "JobExecution",
    "JobRequest",
    "JobStatus",
    "bootstrap_create_job_client",
]
