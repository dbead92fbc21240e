"""Age-based expiry ("dropAfter") evaluation.

Months and years use fixed approximations (30 and 365 days). Changing that
to calendar arithmetic would move which items get dropped at the boundary.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from channel_shop.core.exceptions import ConfigurationError

MS_PER_DAY = 24 * 60 * 60 * 1000

UNIT_MILLISECONDS: dict[str, int] = {
    "d": MS_PER_DAY,
    "w": 7 * MS_PER_DAY,
    "m": 30 * MS_PER_DAY,
    "y": 365 * MS_PER_DAY,
}

_EXPIRY_RE = re.compile(r"^\s*(\d+)\s*(\w)\s*$")


@dataclass(frozen=True)
class ExpiryWindow:
    """Parsed expiry expression such as ``30d`` or ``2y``."""

    magnitude: int
    unit: str

    @property
    def milliseconds(self) -> int:
        return self.magnitude * UNIT_MILLISECONDS[self.unit]

    @property
    def threshold(self) -> timedelta:
        return timedelta(milliseconds=self.milliseconds)

    def __str__(self) -> str:
        return f"{self.magnitude}{self.unit}"


def parse_expiry(expression: str) -> ExpiryWindow:
    """
    Parse a relative expiry expression.

    Args:
        expression: ``<integer><unit>`` with unit in d, w, m, y

    Returns:
        ExpiryWindow

    Raises:
        ConfigurationError: If the magnitude or unit is not recognized
    """
    match = _EXPIRY_RE.match(str(expression))
    if not match:
        raise ConfigurationError(
            f"Invalid dropAfter value: {expression!r} (expected e.g. '30d', '2w', '6m', '1y')",
            field="dropAfter",
        )

    magnitude, unit = match.groups()
    if unit not in UNIT_MILLISECONDS:
        raise ConfigurationError(f"Invalid dropAfter unit: {unit}", field="dropAfter")

    return ExpiryWindow(magnitude=int(magnitude), unit=unit)


def is_expired(now: datetime, published_at: datetime, window: ExpiryWindow) -> bool:
    """
    Check whether an item published at ``published_at`` is past its window.

    Args:
        now: Current instant
        published_at: Publish instant of the item
        window: Expiry window

    Returns:
        True if the elapsed time is strictly greater than the window
    """
    return (now - published_at) > window.threshold
