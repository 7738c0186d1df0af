"""Global pytest fixtures and configuration."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fsc.models.settings import FscSettings  # noqa: E402
from fsc.services.platform import HAL_SUCCESS, PlatformHal  # noqa: E402


class FakeClock:
    """Monotonic clock advanced only by the fake sleep."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Fake clock whose ``sleep`` advances time instantly."""
    return FakeClock()


@pytest.fixture
def fsc_paths(tmp_path):
    """Device paths relocated under tmp_path (files not created)."""
    return {
        "debug_override": tmp_path / "nvram" / "forceFSC",
        "primary_version": tmp_path / "fss" / "gw" / "version.txt",
        "fallback_version": tmp_path / "version.txt",
        "response": tmp_path / "tmp" / "response.txt",
    }


@pytest.fixture
def settings(fsc_paths):
    """FscSettings pointing at the relocated device paths."""
    return FscSettings(
        debug_override_path=str(fsc_paths["debug_override"]),
        version_paths=[
            str(fsc_paths["primary_version"]),
            str(fsc_paths["fallback_version"]),
        ],
        response_path=str(fsc_paths["response"]),
    )


@pytest.fixture
def write_file():
    """Write text to a path, creating parent directories."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mock_platform():
    """Platform layer double recording HAL calls."""
    platform = AsyncMock(spec=PlatformHal)
    platform.set_image_timeout = AsyncMock(return_value=HAL_SUCCESS)
    platform.set_image_valid = AsyncMock(return_value=HAL_SUCCESS)
    return platform


@pytest.fixture
def prod_version_text():
    return "imagename:CGM4331COM_PROD_2023.10.10\nBRANCH=rdkb-2023q3\nVERSION=6.2p1s1\n"


@pytest.fixture
def debug_version_text():
    return "imagename:CGM4331COM_DEV_2023.10.10\nBRANCH=develop\nVERSION=6.2p1s1\n"


@pytest.fixture
def xconf_response_text():
    return (
        '{"firmwareDownloadProtocol":"http",'
        '"firmwareFilename":"CGM4331COM_6.2p1s1_PROD_sey-signed.bin",'
        '"firmwareLocation":"https://dac15cdlserver.ae.ccp.xcal.tv/Images",'
        '"firmwareVersion":"CGM4331COM_6.2p1s1_PROD_sey","rebootImmediately":false}'
    )
