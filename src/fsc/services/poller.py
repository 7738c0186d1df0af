"""Poll loop that waits for a usable update server response."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from fsc.models.context import RunContext
from fsc.models.settings import FscSettings
from fsc.services.prober import EnvironmentProber
from fsc.services.verdict import is_valid

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class Deadline:
    """Fixed-duration window measured on a monotonic clock."""

    def __init__(self, duration: float, clock: Clock = time.monotonic):
        self.duration = duration
        self.clock = clock
        self.start = clock()

    def elapsed(self) -> float:
        return self.clock() - self.start

    def expired(self, elapsed: Optional[float] = None) -> bool:
        """Whether the window has passed, optionally for an earlier reading."""
        if elapsed is None:
            elapsed = self.elapsed()
        return elapsed >= self.duration


class SanityPoller:
    """Drives the Polling -> Done state machine.

    State transitions:
    start ──(no override, not production)──────────────→ done(valid)
      ↓
    polling ──sleep, probe──→ verdict true ─────────────→ done(valid)
      ↑                          ↓ false
      └─────── deadline not reached ←┘ → deadline reached → done(invalid)
    """

    def __init__(
        self,
        prober: EnvironmentProber,
        settings: Optional[FscSettings] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.monotonic,
    ):
        """Initialize poller.

        Args:
            prober: Source of remote response state
            settings: Timing configuration (defaults if None)
            sleep: Awaitable sleep, replaced by a fake in tests
            clock: Monotonic clock, replaced by a fake in tests
        """
        self.logger = logging.getLogger("fsc.poller")
        self.prober = prober
        self.settings = settings or FscSettings()
        self.sleep = sleep
        self.clock = clock
        self.iterations = 0

    async def run(self, context: RunContext) -> bool:
        """Poll until the image is valid or the deadline passes.

        Args:
            context: Startup signals for this run

        Returns:
            Final verdict: True on success, False on timeout
        """
        self.iterations = 0
        if not context.requires_remote_check:
            self.logger.info("No FSC check required for this image, marking valid")
            return True

        deadline = Deadline(self.settings.poll_deadline_seconds, clock=self.clock)
        self.logger.info(
            f"Starting Firmware Sanity Checker Process... "
            f"(debug_override={context.debug_override}, "
            f"image={context.image_class.value}, "
            f"deadline={deadline.duration}s)"
        )

        while True:
            await self.sleep(self.settings.sample_interval_seconds)
            self.iterations += 1
            elapsed = deadline.elapsed()

            response = await self.prober.fetch_remote_response()
            remote_valid = response is not None and response.valid
            verdict = is_valid(context.debug_override, context.is_production, remote_valid)
            self.logger.debug(
                f"Poll {self.iterations} at {elapsed:.1f}s: "
                f"remote_valid={remote_valid}, verdict={verdict}"
            )

            if verdict:
                self.logger.info(
                    f"Valid xconf connection after {elapsed:.1f}s "
                    f"({self.iterations} polls)"
                )
                return True

            if deadline.expired(elapsed):
                self.logger.info("Time expired waiting for valid xconf connection")
                return False
