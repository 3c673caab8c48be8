# cvrf_writer/utils.py

import re
import logging
from typing import Optional, Tuple, Union

logger = logging.getLogger("cvrf-writer")

_VERSION_TOKEN_RE = re.compile(r"[0-9]+(\.[0-9]+)*")


# --- Version Token Helpers ---
def is_version_token(value: str) -> bool:
    """Returns True if value is a dotted-numeric version token such as '1', '2.3' or '2.10.1'."""
    return isinstance(value, str) and bool(_VERSION_TOKEN_RE.fullmatch(value))


def version_key(version: str) -> Tuple[int, ...]:
    """
    Converts a dotted-numeric version token into a tuple of integers.

    Trailing zero segments are dropped so that '1.0' and '1' compare equal.

    Raises:
        ValueError: If the token is not dotted-numeric
    """
    if not is_version_token(version):
        raise ValueError(f"Not a dotted-numeric version token: {version!r}")
    segments = [int(part) for part in version.split(".")]
    while len(segments) > 1 and segments[-1] == 0:
        segments.pop()
    return tuple(segments)


def is_version_greater(candidate: str, current: str) -> bool:
    """Segment-wise numeric comparison: True only if candidate is strictly greater than current."""
    return version_key(candidate) > version_key(current)


# --- Text Helpers ---
def normalize_case(value: str) -> str:
    """Capitalizes the first letter and lowercases the rest ('vendor' / 'VENDOR' -> 'Vendor')."""
    return value[:1].upper() + value[1:].lower()


def format_duration(duration_seconds: Optional[Union[int, float]]) -> str:
    """Formats a duration in seconds into a 'X minutes, Y seconds' string."""
    if duration_seconds is None: return "N/A"
    try:
        duration_seconds = round(float(duration_seconds))
    except (ValueError, TypeError):
        return "Invalid Duration"

    minutes, seconds = divmod(int(duration_seconds), 60)
    if minutes > 0 and seconds > 0: return f"{minutes} minutes, {seconds} seconds"
    elif minutes > 0: return f"{minutes} minutes"
    elif seconds == 1: return f"1 second"
    else: return f"{seconds} seconds"
