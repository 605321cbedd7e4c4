"""Typed client settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

JOB_OUTPUT_MAX_BYTES_DEFAULT = 8_589_934_592


class SettingsLoadError(RuntimeError):
    """Raised when client settings cannot be loaded or validated."""


class ClientSettings(BaseSettings):
    """Settings for the job service client runtime.

    Environment variable names map directly to field names in uppercase.
    Example: `job_service_base_url` reads from `JOB_SERVICE_BASE_URL`.

    Attributes:
        job_service_base_url: Base URL of the job service API.
        job_service_request_timeout_seconds: Per-request HTTP timeout.
        job_service_user_agent: User-Agent header sent with every request.
        job_wait_block_timeout_seconds: Default completion-wait budget.
        job_wait_poll_interval_seconds: Default delay between status polls.
        job_output_max_stdout_bytes: Upper bound on stdout size stored by the service.
        job_output_max_stderr_bytes: Upper bound on stderr size stored by the service.
        log_level: Logging level name.
        log_json: Emit JSON log lines instead of console output.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    job_service_base_url: str = Field(default="http://localhost:8080/api/v3", min_length=1)
    job_service_request_timeout_seconds: float = Field(default=30.0, gt=0)
    job_service_user_agent: str = Field(default="jobclient/1.0 (Python/httpx)", min_length=1)
    job_wait_block_timeout_seconds: float = Field(default=3600.0, ge=0)
    job_wait_poll_interval_seconds: float = Field(default=10.0, ge=0)
    job_output_max_stdout_bytes: int = Field(default=JOB_OUTPUT_MAX_BYTES_DEFAULT, ge=1)
    job_output_max_stderr_bytes: int = Field(default=JOB_OUTPUT_MAX_BYTES_DEFAULT, ge=1)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    @field_validator("job_service_base_url", "job_service_user_agent")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized_value


def config_load_settings() -> ClientSettings:
    """Load and validate client settings from environment and dotenv.

    Returns:
        ClientSettings: Validated client settings object.

    Raises:
        SettingsLoadError: Raised when settings are missing or invalid.
    """

    try:
        return ClientSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Client configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
