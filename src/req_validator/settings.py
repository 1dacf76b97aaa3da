"""
Request validator settings.

Pydantic model for configuring the request middleware.

Example YAML:
    settings:
      validation:
        context_key: dto        # Attribute/key the output mapping is attached under
        default_status: 400     # Status used when no error handler is given
        log_errors: true        # Log rejected requests
        log_traceback: false    # Include the traceback in the log record
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValidatorSettings(BaseModel):
    """
    Pydantic model for request validator configuration.

    Attributes:
        context_key: Name the output mapping is attached under on the request
        default_status: HTTP status used for rejected requests
        log_errors: Whether rejected requests are logged
        log_traceback: Whether the log record carries the traceback

    Example:
        >>> settings = ValidatorSettings(context_key="params")
        >>> settings.default_status
        400
    """

    context_key: str = Field(
        default="dto",
        description="Attribute or key the output mapping is attached under",
    )
    default_status: int = Field(
        default=400,
        description="HTTP status for rejected requests without an error handler",
    )
    log_errors: bool = Field(
        default=True,
        description="Log rejected requests",
    )
    log_traceback: bool = Field(
        default=False,
        description="Include the traceback when logging rejected requests",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("context_key")
    @classmethod
    def validate_context_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("context_key must be a non-empty string")
        return v

    @field_validator("default_status")
    @classmethod
    def validate_default_status(cls, v: int) -> int:
        if not 400 <= v <= 599:
            raise ValueError(f"default_status must be an HTTP error status, got {v}")
        return v


def parse_validator_settings(config: Optional[dict]) -> ValidatorSettings:
    """
    Parse validator settings from a configuration dictionary.

    Args:
        config: Configuration dictionary, typically the YAML ``settings``
                section. Expected to have a 'validation' key.

    Returns:
        ValidatorSettings, with defaults when no 'validation' key is present

    Raises:
        pydantic.ValidationError: If the validation section is invalid

    Example:
        >>> settings = parse_validator_settings({"validation": {"context_key": "params"}})
        >>> settings.context_key
        'params'
    """
    section = (config or {}).get("validation")
    if section is None:
        return ValidatorSettings()
    if isinstance(section, ValidatorSettings):
        return section
    return ValidatorSettings.model_validate(section)
