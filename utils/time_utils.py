"""
Time utility functions for timestamp parsing and duration calculations.

Every timestamp is normalised to naive UTC so values from one batch compare
cleanly: offset-aware inputs are converted to UTC, naive inputs are taken as
UTC already, and raw numbers (or all-digit strings) are Unix epoch seconds.

Time Complexity: O(1)
Memory: O(1)
"""

import numbers
import re
from typing import Any

import pandas as pd

_EPOCH_PATTERN = re.compile(r"^[+-]?\d+(\.\d+)?$")


def is_epoch_seconds(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Real):
        return True
    return isinstance(value, str) and _EPOCH_PATTERN.match(value.strip()) is not None


def parse_timestamp(value: Any) -> pd.Timestamp:
    """Parse one raw timestamp to naive UTC; returns NaT when unparseable."""
    try:
        if is_epoch_seconds(value):
            ts = pd.to_datetime(float(value), unit="s", utc=True, errors="coerce")
        else:
            ts = pd.to_datetime(value, utc=True, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return pd.NaT
    if ts is None or pd.isna(ts):
        return pd.NaT
    return pd.Timestamp(ts).tz_convert(None)


def get_duration_hours(start, end) -> float:
    """Hours elapsed between two timestamps (negative if end precedes start)."""
    return (pd.Timestamp(end) - pd.Timestamp(start)).total_seconds() / 3600
