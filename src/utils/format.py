"""Display formatting for file sizes and timestamps."""

import math
from datetime import datetime

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")

INVALID_DATE = "Invalid Date"

# Timestamps below this are unix seconds, above it milliseconds
MILLISECOND_THRESHOLD = 10_000_000_000


def format_bytes(size: float) -> str:
    """Format a byte count for display.

    Args:
        size: Number of bytes.

    Returns:
        Human-readable size (e.g., "1.5 KB", "12 MB").
    """
    if not math.isfinite(size) or size <= 0:
        return "0 B"
    exponent = 0
    while exponent < len(BYTE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = size / 1024**exponent
    decimals = 0 if value >= 10 else 1
    return f"{value:.{decimals}f} {BYTE_UNITS[exponent]}"


def format_date(timestamp: float) -> str:
    """Format a unix timestamp in local time.

    Accepts seconds or milliseconds.

    Args:
        timestamp: Unix time in seconds or milliseconds.

    Returns:
        Formatted string (e.g., "Dec 30, 2024 02:30 PM"), or "Invalid Date"
        when the timestamp is outside the representable range.
    """
    seconds = timestamp if timestamp < MILLISECOND_THRESHOLD else timestamp / 1000
    try:
        moment = datetime.fromtimestamp(seconds)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE
    return moment.strftime("%b %d, %Y %I:%M %p")
