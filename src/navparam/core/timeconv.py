"""UTC calendar fields to epoch seconds, independent of the host timezone

The conversion counts days in the proleptic Gregorian calendar with integer
arithmetic only, so neither TZ nor daylight-saving rules can leak in the way
they would through time.mktime.
"""

from dataclasses import dataclass
from typing import Any, Tuple

SECONDS_PER_DAY = 86400

# Days between 0000-03-01 and 1970-01-01 in the proleptic Gregorian calendar
_EPOCH_OFFSET_DAYS = 719468
_DAYS_PER_ERA = 146097  # 400 years


@dataclass(frozen=True)
class CalendarFields:
    """Broken-down UTC date and time, named like a NAV-PVT message"""

    year: int
    month: int
    day: int
    hour: int = 0
    min: int = 0
    sec: int = 0


def days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a proleptic Gregorian date (month carries into year)"""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1

    # Shift the year to start in March so the leap day is the last day of it
    if month <= 2:
        year -= 1
    era = year // 400
    year_of_era = year - era * 400
    shifted_month = month - 3 if month > 2 else month + 9
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_PER_ERA + day_of_era - _EPOCH_OFFSET_DAYS


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil"""
    days += _EPOCH_OFFSET_DAYS
    era = days // _DAYS_PER_ERA
    day_of_era = days - era * _DAYS_PER_ERA
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def to_utc_seconds(fields: Any) -> int:
    """Convert an object with year/month/day/hour/min/sec UTC fields to epoch seconds"""
    days = days_from_civil(int(fields.year), int(fields.month), int(fields.day))
    return (
        days * SECONDS_PER_DAY
        + int(fields.hour) * 3600
        + int(fields.min) * 60
        + int(fields.sec)
    )


def from_utc_seconds(seconds: int) -> CalendarFields:
    """Split epoch seconds back into UTC calendar fields"""
    days, remainder = divmod(int(seconds), SECONDS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, remainder = divmod(remainder, 3600)
    minute, sec = divmod(remainder, 60)
    return CalendarFields(year, month, day, hour, minute, sec)
