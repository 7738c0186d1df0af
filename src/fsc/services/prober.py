"""Environment prober: debug marker, image class and remote response."""

import json
import logging
import os
import re
from typing import Optional

import aiofiles
from pydantic import ValidationError

from fsc.models.context import RunContext
from fsc.models.image import ImageClass
from fsc.models.response import ResponseInfo, XconfResponse
from fsc.models.settings import FscSettings

_IMAGENAME_PREFIX = re.compile(r"imagename[:=]")
_FIRMWARE_FILENAME = re.compile(r'"firmwareFilename"\s*:\s*([^,}\n]*)')
NOT_FOUND_MARKER = "404 NOT FOUND"


def parse_image_token(text: str) -> Optional[str]:
    """Extract the build-type token from version descriptor contents.

    Takes the first line starting with ``imagename``, drops one
    ``imagename:`` / ``imagename=`` prefix and returns the second
    ``_``-delimited field. A value without ``_`` is returned whole.

    Args:
        text: Contents of version.txt

    Returns:
        Token with trailing whitespace stripped, or None if no imagename line

    Example:
        >>> parse_image_token("imagename:CGM4331COM_PROD_20231010\\n")
        'PROD'
    """
    for line in text.splitlines():
        if not line.startswith("imagename"):
            continue
        value = _IMAGENAME_PREFIX.sub("", line, count=1)
        fields = value.split("_")
        token = fields[1] if len(fields) > 1 else value
        return token.rstrip()
    return None


def extract_firmware_filename(text: str) -> Optional[str]:
    """Extract the ``firmwareFilename`` value from a response artifact.

    The artifact is normally a JSON object. When it is not (HTTP headers,
    truncated body) the value is taken from the first
    ``"firmwareFilename": ...`` fragment up to the next comma.

    Returns:
        Filename (possibly empty), or None if the key is absent
    """
    response = None
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            response = XconfResponse.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        response = None

    if response is not None:
        if response.firmware_filename is None:
            return None
        return response.firmware_filename.strip()

    match = _FIRMWARE_FILENAME.search(text)
    if match is None:
        return None
    value = match.group(1).strip().strip('"').strip()
    return "" if value == "null" else value


class EnvironmentProber:
    """Answers the three questions the verdict depends on."""

    def __init__(self, settings: Optional[FscSettings] = None):
        """Initialize prober.

        Args:
            settings: Paths and markers to use (defaults if None)
        """
        self.logger = logging.getLogger("fsc.prober")
        self.settings = settings or FscSettings()

    @staticmethod
    def file_exists(path: str) -> bool:
        """Check whether ``path`` exists; any stat error counts as absent."""
        try:
            os.stat(path)
        except (OSError, ValueError):
            return False
        return True

    def debug_override_requested(self) -> bool:
        """Check for the debug override marker file."""
        path = self.settings.debug_override_path
        if self.file_exists(path):
            self.logger.info(f"Debug override file {path} exists, forcing FSC check")
            return True
        return False

    def find_version_file(self) -> Optional[str]:
        """Return the first existing version descriptor path, in preference order."""
        for path in self.settings.version_paths:
            if self.file_exists(path):
                return path
        return None

    async def classify_image(self) -> ImageClass:
        """Classify the running image from its version descriptor.

        Missing or unreadable descriptors classify as production so the
        stricter check applies.
        """
        version_path = self.find_version_file()
        if version_path is None:
            self.logger.error(
                f"Version file not found in {self.settings.version_paths}, "
                f"assuming production image"
            )
            return ImageClass.PRODUCTION

        try:
            async with aiofiles.open(version_path, "r", encoding="utf-8") as f:
                text = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(
                f"Failed to read version file {version_path}: {e}, "
                f"assuming production image"
            )
            return ImageClass.PRODUCTION

        token = parse_image_token(text)
        self.logger.debug(f"imagename token from {version_path}: {token!r}")

        if token and token == self.settings.prod_marker:
            self.logger.info("Production image detected, FSC check active")
            return ImageClass.PRODUCTION

        self.logger.info("Debug/VBN image detected")
        return ImageClass.DEBUG_OR_OTHER

    async def build_context(self) -> RunContext:
        """Establish the startup signals for this run."""
        debug_override = self.debug_override_requested()
        image_class = await self.classify_image()
        return RunContext(debug_override=debug_override, image_class=image_class)

    async def fetch_remote_response(self) -> Optional[ResponseInfo]:
        """Read the update server response artifact.

        Returns:
            None if the artifact doesn't exist yet, otherwise ResponseInfo
            whose ``valid`` flag is True only for a non-empty filename
        """
        path = self.settings.response_path
        if not self.file_exists(path):
            self.logger.warning(
                "Xconf response file does not exist yet, xconf has not responded"
            )
            return None

        try:
            async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
                text = await f.read()
        except OSError as e:
            self.logger.error(f"Failed to read xconf response {path}: {e}")
            return ResponseInfo()

        not_found = NOT_FOUND_MARKER in text
        if not_found:
            self.logger.warning("Xconf server does not recognize this device (404 NOT FOUND)")

        info = ResponseInfo.from_filename(extract_firmware_filename(text), not_found=not_found)
        if info.valid:
            self.logger.info(f"XConf reported a firmware name of {info.firmware_filename}")
        else:
            self.logger.warning(
                "XConf response exists, but did not respond with a valid firmware image name!"
            )
        return info
