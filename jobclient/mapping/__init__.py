"""Mapping layer package for wire payload to domain record translation."""

from .response_mapper import (
    JOB_SEARCH_RESULT_RELATION,
    WIRE_DATETIME_FORMAT,
    mapping_build_application,
    mapping_build_application_list,
    mapping_build_cluster,
    mapping_build_command,
    mapping_build_job,
    mapping_build_job_execution,
    mapping_build_job_list,
    mapping_build_job_request,
    mapping_build_status,
    mapping_extract_embedded_records,
    mapping_parse_job_status,
    mapping_parse_wire_datetime,
    mapping_serialize_job_request,
)

__all__ = [
    "JOB_SEARCH_RESULT_RELATION",
    "WIRE_DATETIME_FORMAT",
    "mapping_build_application",
    "mapping_build_application_list",
    "mapping_build_cluster",
    "mapping_build_command",
    "mapping_build_job",
    "mapping_build_job_execution",
    "mapping_build_job_list",
    "mapping_build_job_request",
    "mapping_build_status",
    "mapping_extract_embedded_records",
    "mapping_parse_job_status",
    "mapping_parse_wire_datetime",
    "mapping_serialize_job_request",
]
