"""Pure mapping between job service JSON payloads and typed domain records.

Every builder is all-or-nothing: a record (or list of records) is returned only
when every required field is present and every date parses under the fixed wire
format. Any deviation raises `JobClientContractViolationError`; unknown fields
are ignored.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Final

from jobclient.adapters.errors import JobClientContractViolationError, JobClientInvalidArgumentError
from jobclient.domain.models import (
    Application,
    Cluster,
    Command,
    Job,
    JobExecution,
    JobRequest,
    JobStatus,
)

WIRE_DATETIME_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%SZ"
HAL_EMBEDDED_KEY: Final[str] = "_embedded"
JOB_SEARCH_RESULT_RELATION: Final[str] = "jobSearchResultList"


def mapping_extract_embedded_records(payload: object, relation: str) -> list[dict[str, Any]]:
    """Extract the ordered records embedded under a HAL relation.

    Args:
        payload: Decoded HAL envelope.
        relation: Relation name under `_embedded`.

    Returns:
        list[dict[str, Any]]: Records in server order; empty when nothing is embedded.

    Raises:
        JobClientContractViolationError: Raised when the envelope or relation has the wrong shape.
    """

    envelope = _mapping_require_object(payload, context="HAL envelope")
    embedded = envelope.get(HAL_EMBEDDED_KEY)
    if embedded is None:
        return []
    embedded_object = _mapping_require_object(embedded, context=f"HAL {HAL_EMBEDDED_KEY}")

    records = embedded_object.get(relation)
    if records is None:
        return []
    if not isinstance(records, list):
        raise JobClientContractViolationError(f"HAL relation {relation} is not a list")
    return [_mapping_require_object(record, context=f"HAL {relation} record") for record in records]


def mapping_parse_wire_datetime(value: object, field_name: str) -> datetime:
    """Parse one wire date in `yyyy-MM-dd'T'HH:mm:ss'Z'` format into a UTC datetime.

    Args:
        value: Candidate wire value.
        field_name: Field label used in error messages.

    Returns:
        datetime: Timezone-aware UTC datetime with second precision.

    Raises:
        JobClientContractViolationError: Raised when the value is not a date in the wire format.
    """

    if not isinstance(value, str):
        raise JobClientContractViolationError(f"Incorrect date format returned by job service: {field_name}")
    try:
        parsed_value = datetime.strptime(value, WIRE_DATETIME_FORMAT)
    except ValueError as error:
        raise JobClientContractViolationError(
            f"Incorrect date format returned by job service: {field_name}={value!r}"
        ) from error
    # strptime accepts unpadded fields
    if parsed_value.strftime(WIRE_DATETIME_FORMAT) != value:
        raise JobClientContractViolationError(
            f"Incorrect date format returned by job service: {field_name}={value!r}"
        )
    return parsed_value.replace(tzinfo=timezone.utc)


def mapping_parse_job_status(value: object) -> JobStatus:
    """Parse one wire status literal against the closed status enumeration.

    Args:
        value: Candidate status literal.

    Returns:
        JobStatus: Matching enumeration member.

    Raises:
        JobClientContractViolationError: Raised for missing or unrecognized status values.
    """

    if not isinstance(value, str):
        raise JobClientContractViolationError("Job status missing from job service response")
    try:
        return JobStatus(value.strip().upper())
    except ValueError as error:
        raise JobClientContractViolationError(f"Unrecognized job status returned by job service: {value!r}") from error


def mapping_build_status(payload: object) -> JobStatus:
    """Build a job status from a minimal `{"status": ...}` payload."""

    status_payload = _mapping_require_object(payload, context="job status")
    return mapping_parse_job_status(status_payload.get("status"))


def mapping_build_job(payload: object) -> Job:
    """Build one job record from a single-job or listing payload.

    Args:
        payload: Decoded job object.

    Returns:
        Job: Typed job record.

    Raises:
        JobClientContractViolationError: Raised when required fields are missing or malformed.
    """

    record = _mapping_require_object(payload, context="job")
    return Job(
        id=_mapping_require_text(record, "id", context="job"),
        name=_mapping_require_text(record, "name", context="job"),
        user=_mapping_require_text(record, "user", context="job"),
        version=_mapping_require_text(record, "version", context="job"),
        command_args=_mapping_require_text(record, "commandArgs", context="job", allow_blank=True),
        status=mapping_parse_job_status(record.get("status")),
        cluster_name=_mapping_optional_text(record, "clusterName", context="job"),
        command_name=_mapping_optional_text(record, "commandName", context="job"),
        started=_mapping_optional_datetime(record, "started"),
        finished=_mapping_optional_datetime(record, "finished"),
    )


def mapping_build_job_list(payload: object) -> list[Job]:
    """Build the ordered job list from a HAL job search envelope.

    Args:
        payload: Decoded HAL envelope.

    Returns:
        list[Job]: Jobs in server order.

    Raises:
        JobClientContractViolationError: Raised when any record is malformed; no partial list is returned.
    """

    records = mapping_extract_embedded_records(payload, relation=JOB_SEARCH_RESULT_RELATION)
    return [mapping_build_job(record) for record in records]


def mapping_build_job_request(payload: object) -> JobRequest:
    """Build the job request the service stored for a job.

    Args:
        payload: Decoded job request object.

    Returns:
        JobRequest: Typed job request.

    Raises:
        JobClientContractViolationError: Raised when required fields are missing or malformed.
    """

    record = _mapping_require_object(payload, context="job request")
    try:
        return JobRequest(
            name=_mapping_require_text(record, "name", context="job request"),
            user=_mapping_require_text(record, "user", context="job request"),
            version=_mapping_require_text(record, "version", context="job request"),
            command_args=_mapping_require_text(record, "commandArgs", context="job request"),
            cluster_name=_mapping_optional_text(record, "clusterName", context="job request"),
            command_name=_mapping_optional_text(record, "commandName", context="job request"),
            description=_mapping_optional_text(record, "description", context="job request"),
            group=_mapping_optional_text(record, "group", context="job request"),
            tags=_mapping_tags(record, context="job request"),
        )
    except JobClientInvalidArgumentError as error:
        raise JobClientContractViolationError(f"Job request returned by job service is invalid: {error}") from error


def mapping_build_cluster(payload: object) -> Cluster:
    """Build the cluster a job runs on."""

    record = _mapping_require_object(payload, context="cluster")
    return Cluster(
        **_mapping_common_entity_fields(record, context="cluster"),
        description=_mapping_optional_text(record, "description", context="cluster"),
        tags=_mapping_tags(record, context="cluster"),
        created=_mapping_optional_datetime(record, "created"),
        updated=_mapping_optional_datetime(record, "updated"),
    )


def mapping_build_command(payload: object) -> Command:
    """Build the command a job runs."""

    record = _mapping_require_object(payload, context="command")
    return Command(
        **_mapping_common_entity_fields(record, context="command"),
        executable=_mapping_optional_text(record, "executable", context="command"),
        description=_mapping_optional_text(record, "description", context="command"),
        tags=_mapping_tags(record, context="command"),
        created=_mapping_optional_datetime(record, "created"),
        updated=_mapping_optional_datetime(record, "updated"),
    )


def mapping_build_application(payload: object) -> Application:
    """Build one application record."""

    record = _mapping_require_object(payload, context="application")
    return Application(
        **_mapping_common_entity_fields(record, context="application"),
        type=_mapping_optional_text(record, "type", context="application"),
        description=_mapping_optional_text(record, "description", context="application"),
        tags=_mapping_tags(record, context="application"),
        created=_mapping_optional_datetime(record, "created"),
        updated=_mapping_optional_datetime(record, "updated"),
    )


def mapping_build_application_list(payload: object) -> list[Application]:
    """Build the ordered application list from a JSON array payload.

    Args:
        payload: Decoded JSON array.

    Returns:
        list[Application]: Applications in server order.

    Raises:
        JobClientContractViolationError: Raised when the payload is not a list or any record is malformed.
    """

    if not isinstance(payload, list):
        raise JobClientContractViolationError("Job applications payload is not a list")
    return [mapping_build_application(record) for record in payload]


def mapping_build_job_execution(payload: object) -> JobExecution:
    """Build the execution record of a job.

    Args:
        payload: Decoded job execution object.

    Returns:
        JobExecution: Typed execution record.

    Raises:
        JobClientContractViolationError: Raised when required fields are missing or malformed.
    """

    record = _mapping_require_object(payload, context="job execution")
    return JobExecution(
        id=_mapping_require_text(record, "id", context="job execution"),
        host_name=_mapping_require_text(record, "hostName", context="job execution"),
        process_id=_mapping_optional_int(record, "processId", context="job execution"),
        check_delay=_mapping_optional_int(record, "checkDelay", context="job execution"),
        exit_code=_mapping_optional_int(record, "exitCode", context="job execution"),
        timeout=_mapping_optional_datetime(record, "timeout"),
    )


def mapping_serialize_job_request(request: JobRequest) -> dict[str, object]:
    """Serialize a job request into its JSON wire body.

    Args:
        request: Job request to serialize.

    Returns:
        dict[str, object]: camelCase wire body; absent optional fields are omitted.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    wire_body: dict[str, object] = {
        "name": request.name,
        "user": request.user,
        "version": request.version,
        "commandArgs": request.command_args,
    }
    optional_fields = {
        "clusterName": request.cluster_name,
        "commandName": request.command_name,
        "description": request.description,
        "group": request.group,
    }
    for wire_name, value in optional_fields.items():
        if value is not None:
            wire_body[wire_name] = value
    if request.tags:
        wire_body["tags"] = list(request.tags)
    return wire_body


def _mapping_require_object(payload: object, context: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise JobClientContractViolationError(f"Job service returned a non-object {context} payload")
    return payload


def _mapping_require_text(record: dict[str, Any], field_name: str, context: str, allow_blank: bool = False) -> str:
    value = record.get(field_name)
    if not isinstance(value, str):
        raise JobClientContractViolationError(f"Job service {context} is missing required field {field_name}")
    if not allow_blank and not value.strip():
        raise JobClientContractViolationError(f"Job service {context} has blank required field {field_name}")
    return value


def _mapping_optional_text(record: dict[str, Any], field_name: str, context: str) -> str | None:
    value = record.get(field_name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise JobClientContractViolationError(f"Job service {context} field {field_name} is not a string")
    return value


def _mapping_optional_int(record: dict[str, Any], field_name: str, context: str) -> int | None:
    value = record.get(field_name)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise JobClientContractViolationError(f"Job service {context} field {field_name} is not an integer")
    return value


def _mapping_optional_datetime(record: dict[str, Any], field_name: str) -> datetime | None:
    value = record.get(field_name)
    if value is None:
        return None
    return mapping_parse_wire_datetime(value, field_name=field_name)


def _mapping_tags(record: dict[str, Any], context: str) -> tuple[str, ...]:
    value = record.get("tags")
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise JobClientContractViolationError(f"Job service {context} tags are not a list of strings")
    return tuple(value)


def _mapping_common_entity_fields(record: dict[str, Any], context: str) -> dict[str, str]:
    return {
        field_name: _mapping_require_text(record, field_name, context=context)
        for field_name in ("id", "name", "user", "version", "status")
    }
