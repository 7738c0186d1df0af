"""Configuration model for the firmware sanity checker."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# 60 minute image validation window reported to the platform (seconds)
FSC_TIMEOUT_VALUE = 60 * 60
# Polling stops this many seconds before the platform watchdog fires
TIME_OFFSET = 300
SAMPLE_INTERVAL = 30

FSC_DEBUG_FILE = "/nvram/forceFSC"
VERSION_FILES = ["/fss/gw/version.txt", "/version.txt"]
XCONF_RESPONSE_FILE = "/tmp/response.txt"
PROD_MARKER = "PROD"


class FscSettings(BaseModel):
    """Paths, timings and platform endpoint used by one checker run.

    Defaults match the on-device layout; a JSON file passed with
    ``--config`` may override any field.
    """

    debug_override_path: str = Field(
        default=FSC_DEBUG_FILE, description="Marker file forcing the FSC check"
    )
    version_paths: list[str] = Field(
        default_factory=lambda: list(VERSION_FILES),
        min_length=1,
        description="Version descriptor locations, in order of preference",
    )
    response_path: str = Field(
        default=XCONF_RESPONSE_FILE,
        description="Response artifact written by the update client",
    )
    prod_marker: str = Field(
        default=PROD_MARKER, description="imagename token identifying production builds"
    )
    timeout_seconds: int = Field(
        default=FSC_TIMEOUT_VALUE, gt=0, description="Timeout reported to the platform"
    )
    time_offset_seconds: int = Field(
        default=TIME_OFFSET, ge=0, description="Safety margin before the platform timeout"
    )
    sample_interval_seconds: float = Field(
        default=SAMPLE_INTERVAL, gt=0, description="Delay between response checks"
    )
    platform_url: Optional[str] = Field(
        None, description="Base URL of the platform HAL bridge (log only if unset)"
    )

    @field_validator("prod_marker")
    @classmethod
    def marker_not_blank(cls, v: str) -> str:
        """The marker is compared against a stripped token."""
        if not v.strip():
            raise ValueError("prod_marker must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def offset_within_timeout(self) -> "FscSettings":
        if self.time_offset_seconds >= self.timeout_seconds:
            raise ValueError(
                f"time_offset_seconds ({self.time_offset_seconds}) must be less than "
                f"timeout_seconds ({self.timeout_seconds})"
            )
        return self

    @property
    def poll_deadline_seconds(self) -> int:
        """Effective polling window: timeout minus the safety offset."""
        return self.timeout_seconds - self.time_offset_seconds

    @classmethod
    def load(cls, config_path: Path) -> "FscSettings":
        """Load settings from a JSON file.

        Args:
            config_path: Path to a JSON object with FscSettings fields

        Returns:
            Validated FscSettings

        Raises:
            FileNotFoundError: If the file doesn't exist
            UnicodeDecodeError: If the file is not UTF-8 text
            json.JSONDecodeError: If the file is not valid JSON
            pydantic.ValidationError: If a field fails validation
        """
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.model_validate(data)
