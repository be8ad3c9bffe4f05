"""Date and time helpers"""
import time
from datetime import date


MS_PER_SECOND = 1000
MS_PER_HOUR = 3_600_000


def epoch_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch"""
    return int(time.time() * MS_PER_SECOND)


def today() -> date:
    return date.today()


def format_elapsed(ms: int) -> str:
    """
    Format a duration as HH:MM:SS.

    Args:
        ms: duration in milliseconds (negative values are treated as zero)

    Returns:
        str: e.g. "00:02:05" for 125000; hours keep growing past 99
    """
    total_seconds = max(ms, 0) // MS_PER_SECOND
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def ms_to_hours(ms: int, ndigits: int = 2) -> float:
    """Convert milliseconds to fractional hours rounded to ndigits"""
    return round(ms / MS_PER_HOUR, ndigits)
