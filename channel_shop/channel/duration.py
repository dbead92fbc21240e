"""ISO-8601 video duration parsing."""

import re

# YouTube contentDetails.duration, e.g. "PT1H2M3S"
_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def parse_duration(duration: str | None) -> int:
    """
    Convert a ``PT[nH][nM][nS]`` duration into whole seconds.

    Missing components count as zero. Input that does not match at all
    yields 0 instead of raising, so one odd item cannot abort a sync pass.

    Args:
        duration: Encoded duration string

    Returns:
        Total seconds (non-negative)
    """
    if not duration:
        return 0

    match = _DURATION_RE.search(duration)
    if not match:
        return 0

    hours, minutes, seconds = (int(group) if group else 0 for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds
