"""Remote update server response models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class XconfResponse(BaseModel):
    """JSON body deposited by the network update client.

    Only ``firmwareFilename`` matters for the verdict; other keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    firmware_filename: Optional[str] = Field(None, alias="firmwareFilename")


class ResponseInfo(BaseModel):
    """Outcome of reading a response artifact that exists on disk."""

    model_config = ConfigDict(frozen=True)

    firmware_filename: str = Field(
        default="", description="Extracted firmware filename (may be empty)"
    )
    valid: bool = Field(
        default=False, description="True only when a non-empty filename was found"
    )
    not_found: bool = Field(
        default=False,
        description="Server answered 404 NOT FOUND (device not recognised)",
    )

    @classmethod
    def from_filename(cls, filename: Optional[str], not_found: bool = False) -> "ResponseInfo":
        """Build info from an extracted filename, deriving ``valid``."""
        name = (filename or "").strip()
        return cls(firmware_filename=name, valid=bool(name), not_found=not_found)
