"""
Environment configuration for sigterm-capture.

Loads configuration from environment variables using pydantic-settings.
ECS-provided variables are read under their native names.
"""

import socket
from functools import lru_cache
from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sigterm_capture.domain.services import DEFAULT_EXPECTED_STOP_REASONS
from sigterm_capture.domain.value_objects import DiagnosticCommand


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Metadata Endpoint Configuration
    metadata_uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "metadata_uri", "ECS_CONTAINER_METADATA_URI_V4", "ECS_CONTAINER_METADATA_URI"
        ),
        description="Task metadata endpoint, unset outside ECS",
    )
    metadata_timeout: float = Field(default=2.0, gt=0, le=30, description="Metadata fetch timeout in seconds")

    # Control Plane Configuration
    aws_region: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("aws_region", "AWS_REGION", "AWS_DEFAULT_REGION"),
        description="Region of the ECS control plane",
    )
    describe_timeout: float = Field(default=10.0, gt=0, le=120, description="DescribeTasks deadline in seconds")
    poll_interval: float = Field(default=0.05, gt=0, le=5, description="Initial poll interval in seconds")
    max_poll_interval: float = Field(default=1.0, gt=0, le=10, description="Maximum poll interval in seconds")
    expected_stop_reasons: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXPECTED_STOP_REASONS),
        description="Stop reason substrings that mark an expected shutdown",
    )

    # Diagnostic Capture Configuration
    diagnostic_commands: Dict[str, str] = Field(
        default_factory=lambda: {"process": "ps aux", "env": "env"},
        description="Ordered artifact name -> shell command mapping",
    )
    command_timeout: float = Field(default=5.0, gt=0, le=60, description="Per-command timeout in seconds")
    diagnostic_shell: str = Field(default="/bin/bash", description="Shell used to run diagnostic commands")

    # Artifact Configuration
    artifact_dir: str = Field(default="/data", description="Mounted directory for artifacts")
    host_id: str = Field(
        default_factory=socket.gethostname,
        validation_alias=AliasChoices("host_id", "HOST_ID", "HOSTNAME"),
        description="Host identifier used in artifact file names",
    )

    # Shutdown Configuration
    grace_period: float = Field(default=25.0, gt=0, le=120, description="Time limit for the shutdown pipeline in seconds")

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP API port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["text", "json"] = Field(
        default="text", description="Logging format - text for human-readable, json for structured logs"
    )

    @field_validator("diagnostic_commands")
    @classmethod
    def validate_diagnostic_commands(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Artifact names become file names: no separators, no leading dot."""
        for name in v:
            if not name or "/" in name or ".." in name or name.startswith("."):
                raise ValueError(f"Invalid diagnostic artifact name: {name!r}")
        return v

    def get_diagnostic_commands(self) -> List[DiagnosticCommand]:
        """Diagnostic commands in configured order."""
        return [
            DiagnosticCommand(name=name, command=command)
            for name, command in self.diagnostic_commands.items()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
