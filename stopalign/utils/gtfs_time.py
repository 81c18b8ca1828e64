"""
GTFS Time Utilities
===================
Parsing helpers for GTFS HH:MM:SS times, which may run past 24:00:00 for
trips that continue after midnight.
"""

import re
from typing import Optional

import pandas as pd

_TIME_RE = re.compile(r'^\s*(\d{1,3}):([0-5]\d):([0-5]\d)\s*$')


def is_missing(value) -> bool:
    """True for None, NaN and blank strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_gtfs_time(value) -> Optional[int]:
    """
    Convert a GTFS time string to seconds since service-day midnight.

    Args:
        value: Time like '08:05:00' or '25:10:00'. Missing values yield None.

    Returns:
        Seconds, or None when the value is missing.

    Raises:
        ValueError: if the value is present but not a valid GTFS time.
    """
    if is_missing(value):
        return None
    match = _TIME_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid GTFS time: {value!r}")
    hours, minutes, seconds = (int(part) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def format_gtfs_time(seconds: int) -> str:
    """Format seconds since midnight as a zero-padded GTFS time."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def clean_time(value) -> Optional[str]:
    """Return a stripped time string, or None when missing."""
    if is_missing(value):
        return None
    return str(value).strip()
