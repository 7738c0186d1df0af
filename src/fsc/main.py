"""Entry point for the Firmware Sanity Checker.

Runs one decision cycle per process:
- Report the image validation timeout to the platform
- Establish debug override and image class
- Poll for the update server response if required
- Report the verdict to the platform and exit 0
"""

import argparse
import asyncio
import logging
import time
from pathlib import Path
from typing import Optional, Sequence

from fsc.models.settings import FscSettings
from fsc.services.platform import HttpPlatformHal, LoggingPlatformHal, PlatformHal
from fsc.services.poller import Clock, SanityPoller, Sleep
from fsc.services.prober import EnvironmentProber
from fsc.services.reporter import VerdictReporter
from fsc.utils.logging import setup_logger


async def run_checker(
    settings: FscSettings,
    platform: PlatformHal,
    prober: Optional[EnvironmentProber] = None,
    sleep: Sleep = asyncio.sleep,
    clock: Clock = time.monotonic,
) -> bool:
    """Run one firmware sanity check cycle.

    Args:
        settings: Paths and timings for this run
        platform: Platform layer receiving the timeout and verdict
        prober: Environment prober (built from settings if None)
        sleep: Awaitable sleep used between polls
        clock: Monotonic clock used for the deadline

    Returns:
        Final verdict reported to the platform
    """
    logger = logging.getLogger("fsc.main")
    logger.info("Started Firmware Sanity Checker")

    reporter = VerdictReporter(platform, settings)
    await reporter.report_timeout()

    prober = prober or EnvironmentProber(settings)
    context = await prober.build_context()

    poller = SanityPoller(prober, settings, sleep=sleep, clock=clock)
    valid = await poller.run(context)

    await reporter.report_verdict(valid)
    logger.info(
        f"Firmware Sanity Checker Exit with valid image: {'true' if valid else 'false'}"
    )
    return valid


def load_settings(config_path: Optional[str], platform_url: Optional[str]) -> FscSettings:
    """Build settings from an optional JSON file and CLI overrides.

    An unusable config file is logged and replaced by defaults so the
    decision cycle still runs.
    """
    logger = logging.getLogger("fsc.main")
    settings = FscSettings()

    if config_path:
        try:
            settings = FscSettings.load(Path(config_path))
            logger.info(f"Loaded configuration from {config_path}")
        except (OSError, ValueError) as e:
            # ValueError covers decode errors and pydantic ValidationError
            logger.error(f"Invalid configuration {config_path}: {e}, using defaults")

    if platform_url:
        settings = settings.model_copy(update={"platform_url": platform_url})
    return settings


def build_platform(settings: FscSettings) -> PlatformHal:
    """Pick the platform layer for this run."""
    if settings.platform_url:
        return HttpPlatformHal(base_url=settings.platform_url)
    return LoggingPlatformHal()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fsc-monitor",
        description="Firmware Sanity Checker: mark a new firmware image valid or invalid",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Append diagnostic log to this file (default: stderr)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON file overriding paths and timings",
    )
    parser.add_argument(
        "--platform-url",
        default=None,
        help="Base URL of the platform HAL bridge (default: log only)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point. Always returns 0; the verdict goes to the platform."""
    args = parse_args(argv)
    setup_logger(
        "fsc",
        args.log_file,
        level=logging.DEBUG if args.debug else logging.INFO,
    )

    try:
        settings = load_settings(args.config, args.platform_url)
        asyncio.run(run_checker(settings, build_platform(settings)))
    finally:
        logging.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
