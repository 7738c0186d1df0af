"""Platform abstraction layer for image timeout and validity marking.

The vendor platform owns the actual bank switch. This process only
tells it two things:

    set image timeout (seconds)  ->  platform_hal_SetDeviceCodeImageTimeout
    set image valid (bool)       ->  platform_hal_SetDeviceCodeImageValid

Both calls return a HAL-style integer status (0 = success). Callers log
the status and never retry; the platform keeps its own watchdog.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

HAL_SUCCESS = 0
HAL_FAILURE = -1


class PlatformHal(ABC):
    """Interface to the vendor platform layer."""

    @abstractmethod
    async def set_image_timeout(self, seconds: int) -> int:
        """Tell the platform how long the new image has to prove itself."""

    @abstractmethod
    async def set_image_valid(self, flag: bool) -> int:
        """Commit the validity verdict for the running image."""


class LoggingPlatformHal(PlatformHal):
    """Platform stand-in that only logs the calls.

    Used when no platform bridge is configured (lab builds, dry runs).
    """

    def __init__(self):
        self.logger = logging.getLogger("fsc.platform")

    async def set_image_timeout(self, seconds: int) -> int:
        self.logger.info(f"platform: set device code image timeout to {seconds}s")
        return HAL_SUCCESS

    async def set_image_valid(self, flag: bool) -> int:
        self.logger.info(f"platform: set device code image valid to {flag}")
        return HAL_SUCCESS


class HttpPlatformHal(PlatformHal):
    """Forwards HAL calls to a platform bridge service over HTTP."""

    def __init__(
        self,
        base_url: str = "http://localhost:9090",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize HTTP platform bridge client.

        Args:
            base_url: Base URL of the platform bridge (default: http://localhost:9090)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests mount a mock app here)
        """
        self.logger = logging.getLogger("fsc.platform")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.timeout_endpoint = f"{self.base_url}/api/v1.0/platform/image/timeout"
        self.valid_endpoint = f"{self.base_url}/api/v1.0/platform/image/valid"

    async def set_image_timeout(self, seconds: int) -> int:
        return await self._post(self.timeout_endpoint, {"seconds": seconds})

    async def set_image_valid(self, flag: bool) -> int:
        return await self._post(self.valid_endpoint, {"valid": flag})

    async def _post(self, url: str, payload: dict) -> int:
        """POST payload and map the outcome to a HAL status.

        Note:
            Failures are logged but not raised, the verdict cycle must finish
        """
        self.logger.debug(f"Calling platform bridge: {url} {payload}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            self.logger.warning(f"Platform call to {url} failed: {e}")
            return HAL_FAILURE

        try:
            status = int(response.json().get("status", HAL_SUCCESS))
        except (ValueError, AttributeError, TypeError):
            status = HAL_SUCCESS
        self.logger.debug(f"Platform call to {url} returned status {status}")
        return status
