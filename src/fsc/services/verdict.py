"""Verdict combinator for the firmware sanity check."""


def is_valid(debug_override: bool, is_production: bool, remote_valid: bool) -> bool:
    """Combine the three startup/poll signals into a validity verdict.

    A valid remote response is required only when the debug override is
    set or the image is a production build; any other image is trusted.

    Args:
        debug_override: Debug override marker present
        is_production: Running a production image
        remote_valid: Update server responded with a firmware filename

    Returns:
        True if the image should be considered valid
    """
    return (
        (debug_override and remote_valid)
        or (is_production and remote_valid)
        or (not debug_override and not is_production)
    )
