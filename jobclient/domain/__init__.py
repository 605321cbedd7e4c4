"""Domain models used across client layer boundaries."""

from .models import (
    Application,
    Cluster,
    Command,
    CompletionWaitState,
    Job,
    JobAttachment,
    JobExecution,
    JobRequest,
    JobStatus,
)

__all__ = [
    "Application",
    "Cluster",
    "Command",
    "CompletionWaitState",
    "Job",
    "JobAttachment",
    "JobExecution",
    "JobRequest",
    "JobStatus",
]
