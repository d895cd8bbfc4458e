"""
Helpers for moving MT4 server timestamps onto the TradingView chart clock.

MT4 reports print times in the broker server's clock. Pine Script's
timestamp() literals are read in the chart's clock, so every raw time goes
through two fixed shifts: server -> true UTC, then UTC -> chart display.
No timezone database is involved and daylight saving is ignored.
"""

from collections import namedtuple
from datetime import datetime, timedelta, timezone

from constants import CONST

DisplayTimestamp = namedtuple("DisplayTimestamp", ["year", "month", "day", "hour", "minute"])

MT4_UTC_OFFSET = timedelta(hours=CONST.MT4_UTC_OFFSET_HOURS)
DISPLAY_OFFSET = timedelta(hours=CONST.TV_UTC_OFFSET_HOURS + CONST.TV_DISPLAY_CORRECTION_HOURS)


def to_true_utc(date_str: str) -> datetime:
    """
    Parses an MT4 date string (e.g. "2025.06.25 16:09:01") into the true UTC instant.

    Args:
        date_str: The date string as printed in the MT4 report.

    Returns:
        A timezone-aware datetime in UTC.
    """
    server_time = datetime.strptime(date_str.strip(), CONST.MT4_DATE_TIME_FORMAT)
    return server_time.replace(tzinfo=timezone.utc) - MT4_UTC_OFFSET


def to_display_timestamp(true_utc: datetime) -> DisplayTimestamp:
    """
    Converts a true UTC instant into the calendar fields Pine Script's
    timestamp() should receive so the label lands on the right bar.

    The result is not an instant; it is what the chart clock reads.
    """
    if true_utc.tzinfo is None:
        true_utc = true_utc.replace(tzinfo=timezone.utc)
    shifted = true_utc.astimezone(timezone.utc) + DISPLAY_OFFSET
    return DisplayTimestamp(shifted.year, shifted.month, shifted.day, shifted.hour, shifted.minute)


def raw_to_display_timestamp(date_str: str) -> DisplayTimestamp:
    return to_display_timestamp(to_true_utc(date_str))
