"""Client bootstrap wiring for settings validation and dependency assembly."""

from jobclient.adapters import HttpxTransport
from jobclient.client import JobClient
from jobclient.config import ClientSettings, config_load_settings, config_setup_logging


def bootstrap_create_job_client(settings: ClientSettings | None = None, configure_logging: bool = False) -> JobClient:
    """Assemble a job client from validated settings.

    Args:
        settings: Optional pre-loaded settings; loaded from environment and dotenv when omitted.
        configure_logging: Apply the configured log level and format when True.

    Returns:
        JobClient: Fully wired client over a pooled httpx transport.

    Raises:
        SettingsLoadError: Raised when settings validation fails.
    """

    resolved_settings = settings or config_load_settings()
    if configure_logging:
        config_setup_logging(log_level=resolved_settings.log_level, json_logs=resolved_settings.log_json)

    transport = HttpxTransport(
        base_url=resolved_settings.job_service_base_url,
        request_timeout_seconds=resolved_settings.job_service_request_timeout_seconds,
        user_agent=resolved_settings.job_service_user_agent,
    )
    return JobClient(
        transport=transport,
        default_block_timeout_seconds=resolved_settings.job_wait_block_timeout_seconds,
        default_poll_interval_seconds=resolved_settings.job_wait_poll_interval_seconds,
        max_stdout_bytes=resolved_settings.job_output_max_stdout_bytes,
        max_stderr_bytes=resolved_settings.job_output_max_stderr_bytes,
    )
