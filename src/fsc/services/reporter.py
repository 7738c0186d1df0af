"""Verdict reporting to the platform layer."""

import logging
from typing import Awaitable, Optional

from fsc.models.settings import FscSettings
from fsc.services.platform import HAL_FAILURE, HAL_SUCCESS, PlatformHal


class VerdictReporter:
    """Reports the timeout budget and the final verdict to the platform."""

    def __init__(self, platform: PlatformHal, settings: Optional[FscSettings] = None):
        """Initialize verdict reporter.

        Args:
            platform: Platform layer receiving the calls
            settings: Supplies the timeout budget (defaults if None)
        """
        self.logger = logging.getLogger("fsc.reporter")
        self.platform = platform
        self.settings = settings or FscSettings()

    async def report_timeout(self) -> int:
        """Tell the platform the image validation expiry time."""
        seconds = self.settings.timeout_seconds
        self.logger.info(f"Reporting image validation timeout: {seconds}s")
        return await self._call("set image timeout", self.platform.set_image_timeout(seconds))

    async def report_verdict(self, valid: bool) -> int:
        """Tell the platform whether the running image is valid."""
        self.logger.info(f"Reporting image valid: {valid}")
        return await self._call("set image valid", self.platform.set_image_valid(valid))

    async def _call(self, name: str, call: Awaitable[int]) -> int:
        """Await a platform call and log its status.

        Note:
            Failures are logged but not raised or retried
        """
        try:
            status = await call
        except Exception as e:
            self.logger.error(f"Unexpected error in platform {name}: {e}", exc_info=True)
            return HAL_FAILURE

        if status == HAL_SUCCESS:
            self.logger.debug(f"Platform {name} succeeded")
        else:
            self.logger.warning(f"Platform {name} returned status {status}, not retrying")
        return status
