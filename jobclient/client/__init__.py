"""Client layer package for job service component clients."""

from .artifacts import JobArtifactClient
from .common import client_build_job_path, client_require_job_id
from .completion import JobCompletionWaiter
from .job_client import JobClient
from .query import JobQueryClient
from .status import JobStatusClient
from .submission import JobSubmissionClient, submission_build_attachments, submission_extract_job_id

__all__ = [
	"JobArtifactClient",
	"JobClient",
	"JobCompletionWaiter",
	"JobQueryClient",
	"JobStatusClient",
	"JobSubmissionClient",
	"client_build_job_path",
	"client_require_job_id",
	"submission_build_attachments",
	"submission_extract_job_id",
]
