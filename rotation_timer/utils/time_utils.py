"""
Utility functions for the Rotation Timer application.

This module contains common time helpers used throughout the application.
"""
import time


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as an M:SS clock string.

    Negative values are clamped to zero.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in M:SS format

    Example:
        >>> fmt_mmss(90)
        '1:30'
        >>> fmt_mmss(2400)
        '40:00'
    """
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m}:{s:02d}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()
