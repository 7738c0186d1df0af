"""Image classification enum for the firmware sanity checker."""

from enum import Enum


class ImageClass(str, Enum):
    """Class of the running firmware image.

    Production images require a valid remote response before they are
    marked valid; every other build is trusted unless the debug override
    marker forces the check.
    """

    PRODUCTION = "production"
    DEBUG_OR_OTHER = "debug_or_other"
