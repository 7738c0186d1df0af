"""Run context established once at process start."""

from pydantic import BaseModel, ConfigDict, Field

from fsc.models.image import ImageClass


class RunContext(BaseModel):
    """Startup signals that stay fixed for the lifetime of the run."""

    model_config = ConfigDict(frozen=True)

    debug_override: bool = Field(
        ..., description="True when the debug override marker file exists"
    )
    image_class: ImageClass = Field(..., description="Class of the running image")

    @property
    def is_production(self) -> bool:
        return self.image_class == ImageClass.PRODUCTION

    @property
    def requires_remote_check(self) -> bool:
        """Whether the poll loop has to wait for a remote response."""
        return self.debug_override or self.is_production
