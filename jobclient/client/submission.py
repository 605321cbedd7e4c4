"""Job submission client for plain and multipart job creation requests."""

from __future__ import annotations

import json
from contextlib import ExitStack
from pathlib import PurePath
from typing import Final, Sequence
from urllib.parse import urlsplit

from jobclient.adapters.errors import JobClientContractViolationError, JobClientInvalidArgumentError
from jobclient.adapters.interfaces import TransportMultipartPart, TransportPort, TransportResponse
from jobclient.config.logging_config import config_get_logger
from jobclient.domain.models import JobAttachment, JobRequest
from jobclient.mapping.response_mapper import mapping_serialize_job_request

from .common import JOBS_COLLECTION_PATH, client_require_success

logger = config_get_logger(__name__)


def submission_extract_job_id(location: str | None) -> str:
    """Extract the created job identifier from a location indicator.

    Args:
        location: Location header value, for example `https://host/api/v3/jobs/abc-123`;
            query string and fragment are ignored.

    Returns:
        str: Final segment of the location path.

    Raises:
        JobClientContractViolationError: Raised when the location is missing or has no trailing segment.
    """

    location_path = urlsplit((location or "").strip()).path.rstrip("/")
    job_id = location_path[location_path.rfind("/") + 1 :]
    if not job_id:
        raise JobClientContractViolationError("Job service response is missing a usable Location header")
    return job_id


def submission_build_attachments(file_paths: Sequence[str]) -> list[JobAttachment]:
    """Resolve local file paths into named attachment references.

    Args:
        file_paths: Local file paths in submission order.

    Returns:
        list[JobAttachment]: Attachments named by their final path segment.

    Raises:
        JobClientInvalidArgumentError: Raised when a path is blank.
    """

    attachments: list[JobAttachment] = []
    for file_path in file_paths:
        if not isinstance(file_path, str) or not file_path.strip():
            raise JobClientInvalidArgumentError("Attachment file path must not be blank")
        attachments.append(JobAttachment(name=PurePath(file_path).name, path=file_path))
    return attachments


class JobSubmissionClient:
    """Component client that creates jobs on the job service."""

    _REQUEST_PART_NAME: Final[str] = "request"
    _ATTACHMENT_PART_NAME: Final[str] = "attachment"
    _ATTACHMENT_CONTENT_TYPE: Final[str] = "application/octet-stream"
    _REQUEST_CONTENT_TYPE: Final[str] = "application/json"

    def __init__(self, transport: TransportPort):
        self._transport = transport

    def submission_submit(self, request: JobRequest | None) -> str:
        """Submit a job request as a JSON body.

        Args:
            request: Job request to submit.

        Returns:
            str: Identifier assigned to the new job.

        Raises:
            JobClientInvalidArgumentError: Raised when the request is missing.
            JobClientTransportError: Raised when the network call cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects the request.
            JobClientContractViolationError: Raised when the response carries no usable location.
        """

        if request is None:
            raise JobClientInvalidArgumentError("Job request cannot be None.")

        response = self._transport.transport_request(
            "POST",
            JOBS_COLLECTION_PATH,
            json_payload=mapping_serialize_job_request(request),
        )
        return self._submission_job_id_from_response(response, request=request, attachment_count=0)

    def submission_submit_with_attachments(
        self,
        request: JobRequest | None,
        file_paths: Sequence[str] | None = None,
    ) -> str:
        """Submit a job request together with file attachments in one multipart body.

        Every file is opened before the request is sent. If any file cannot be
        opened the whole submission is aborted without network I/O.

        Args:
            request: Job request to submit.
            file_paths: Local attachment paths; defaults to `request.attachment_paths`.

        Returns:
            str: Identifier assigned to the new job.

        Raises:
            JobClientInvalidArgumentError: Raised when the request is missing or an attachment cannot be opened.
            JobClientTransportError: Raised when the network call cannot complete.
            JobClientRemoteRejectionError: Raised when the service rejects the request.
            JobClientContractViolationError: Raised when the response carries no usable location.
        """

        if request is None:
            raise JobClientInvalidArgumentError("Job request cannot be None.")

        resolved_file_paths = request.attachment_paths if file_paths is None else file_paths
        attachments = submission_build_attachments(resolved_file_paths)

        with ExitStack() as open_files:
            multipart_parts = [
                TransportMultipartPart(
                    name=self._REQUEST_PART_NAME,
                    filename=None,
                    content=json.dumps(mapping_serialize_job_request(request)).encode("utf-8"),
                    content_type=self._REQUEST_CONTENT_TYPE,
                )
            ]
            for attachment in attachments:
                try:
                    file_handle = open_files.enter_context(open(attachment.path, "rb"))
                except OSError as error:
                    raise JobClientInvalidArgumentError(
                        f"Attachment file cannot be opened: {attachment.path}"
                    ) from error
                multipart_parts.append(
                    TransportMultipartPart(
                        name=self._ATTACHMENT_PART_NAME,
                        filename=attachment.name,
                        content=file_handle,
                        content_type=self._ATTACHMENT_CONTENT_TYPE,
                    )
                )

            response = self._transport.transport_request(
                "POST",
                JOBS_COLLECTION_PATH,
                multipart_parts=multipart_parts,
            )

        return self._submission_job_id_from_response(
            response,
            request=request,
            attachment_count=len(attachments),
        )

    def _submission_job_id_from_response(
        self,
        response: TransportResponse,
        request: JobRequest,
        attachment_count: int,
    ) -> str:
        client_require_success(response, operation="job submission")
        job_id = submission_extract_job_id(response.headers.get("location"))
        logger.info(
            "job_submitted",
            job_id=job_id,
            job_name=request.name,
            attachment_count=attachment_count,
        )
        return job_id
