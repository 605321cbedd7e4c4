"""Typed domain models for jobs and the entities related to them.

Every record here is an immutable snapshot of server-held state. The client
never mutates these values; it rebuilds them from each server response.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from jobclient.adapters.errors import JobClientInvalidArgumentError


class JobStatus(str, Enum):
    """Closed enumeration of job lifecycle states reported by the service.

    Values:
        INIT: The job was accepted and is being set up.
        RUNNING: The job is executing.
        SUCCEEDED: The job finished successfully.
        FAILED: The job finished with an error.
        KILLED: The job was killed before it finished.
    """

    INIT = "INIT"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    KILLED = "KILLED"

    @property
    def is_terminal(self) -> bool:
        """Return whether no further status transition is expected."""

        return self in _TERMINAL_JOB_STATUSES


_TERMINAL_JOB_STATUSES = frozenset({JobStatus.SUCCEEDED, JobStatus.FAILED, JobStatus.KILLED})


class CompletionWaitState(str, Enum):
    """States of one completion wait."""

    PENDING = "PENDING"
    DONE = "DONE"
    TIMED_OUT = "TIMED_OUT"


@dataclass(frozen=True)
class JobRequest:
    """Immutable description of work to submit.

    Attributes:
        name: Job name.
        user: Owning user.
        version: Job version label.
        command_args: Command-line arguments for the job; must not be blank.
        cluster_name: Optional cluster name hint.
        command_name: Optional command name hint.
        description: Optional free-form description.
        group: Optional group the user belongs to.
        tags: Tags attached to the job.
        attachment_paths: Local file paths sent as attachments by multipart submission.
    """

    name: str
    user: str
    version: str
    command_args: str
    cluster_name: str | None = None
    command_name: str | None = None
    description: str | None = None
    group: str | None = None
    tags: tuple[str, ...] = ()
    attachment_paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for field_name in ("name", "user", "version", "command_args"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise JobClientInvalidArgumentError(f"JobRequest.{field_name} must not be blank")


@dataclass(frozen=True)
class Job:
    """Server-assigned job record.

    Attributes:
        id: Opaque identifier assigned by the service.
        name: Job name.
        user: Owning user.
        version: Job version label.
        command_args: Command-line arguments of the job.
        status: Lifecycle status at fetch time.
        cluster_name: Cluster the job runs on, once chosen.
        command_name: Command the job runs, once chosen.
        started: Start instant in UTC.
        finished: Finish instant in UTC.
    """

    id: str
    name: str
    user: str
    version: str
    command_args: str
    status: JobStatus
    cluster_name: str | None = None
    command_name: str | None = None
    started: datetime | None = None
    finished: datetime | None = None


@dataclass(frozen=True)
class Cluster:
    """Cluster a job was scheduled on."""

    id: str
    name: str
    user: str
    version: str
    status: str
    description: str | None = None
    tags: tuple[str, ...] = ()
    created: datetime | None = None
    updated: datetime | None = None


@dataclass(frozen=True)
class Command:
    """Command a job was resolved to."""

    id: str
    name: str
    user: str
    version: str
    status: str
    executable: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    created: datetime | None = None
    updated: datetime | None = None


@dataclass(frozen=True)
class Application:
    """Application made available to a job's command."""

    id: str
    name: str
    user: str
    version: str
    status: str
    type: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    created: datetime | None = None
    updated: datetime | None = None


@dataclass(frozen=True)
class JobExecution:
    """Execution record populated once the job process starts.

    Attributes:
        id: Job identifier the execution belongs to.
        host_name: Host running the job process.
        process_id: Operating system process id.
        check_delay: Delay in milliseconds between liveness checks.
        exit_code: Process exit code, once known.
        timeout: Instant after which the service kills the job.
    """

    id: str
    host_name: str
    process_id: int | None = None
    check_delay: int | None = None
    exit_code: int | None = None
    timeout: datetime | None = None


@dataclass(frozen=True)
class JobAttachment:
    """Named attachment derived from a local file path for one submission.

    Attributes:
        name: Final path segment, used as the advertised file name.
        path: Local file path the bytes are read from.
    """

    name: str
    path: str
