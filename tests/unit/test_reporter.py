"""Unit tests for VerdictReporter."""

import pytest
from unittest.mock import AsyncMock

from fsc.models.settings import FscSettings
from fsc.services.platform import HAL_FAILURE
from fsc.services.reporter import VerdictReporter


@pytest.mark.unit
class TestVerdictReporter:
    """Test VerdictReporter in isolation."""

    @pytest.fixture
    def reporter(self, mock_platform):
        return VerdictReporter(mock_platform)

    @pytest.mark.asyncio
    async def test_report_timeout_uses_full_budget(self, reporter, mock_platform):
        status = await reporter.report_timeout()

        assert status == 0
        mock_platform.set_image_timeout.assert_awaited_once_with(3600)
        mock_platform.set_image_valid.assert_not_called()

    @pytest.mark.asyncio
    async def test_report_timeout_custom_settings(self, mock_platform):
        reporter = VerdictReporter(mock_platform, FscSettings(timeout_seconds=1200))

        await reporter.report_timeout()

        mock_platform.set_image_timeout.assert_awaited_once_with(1200)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("valid", [True, False])
    async def test_report_verdict(self, reporter, mock_platform, valid):
        await reporter.report_verdict(valid)

        mock_platform.set_image_valid.assert_awaited_once_with(valid)

    @pytest.mark.asyncio
    async def test_failure_status_logged_not_retried(self, reporter, mock_platform, caplog):
        mock_platform.set_image_valid = AsyncMock(return_value=HAL_FAILURE)

        with caplog.at_level("WARNING", logger="fsc.reporter"):
            status = await reporter.report_verdict(True)

        assert status == HAL_FAILURE
        assert mock_platform.set_image_valid.await_count == 1
        assert "not retrying" in caplog.text

    @pytest.mark.asyncio
    async def test_platform_exception_not_raised(self, reporter, mock_platform):
        mock_platform.set_image_timeout = AsyncMock(side_effect=RuntimeError("hal down"))

        status = await reporter.report_timeout()

        assert status == HAL_FAILURE
        mock_platform.set_image_timeout.assert_awaited_once()
