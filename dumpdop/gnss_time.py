import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Tuple, Union

from dumpdop.exceptions import FilenameDateError
from dumpdop.global_config import get_global_config

_DATE_PATTERN = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})")


class GNSSTime:
    """Utility class for GPS week / Unix time conversions.

    Notes:
    - GPS time-of-week counts seconds from the Saturday/Sunday midnight that
      starts the GPS week.
    - No leap-second correction is applied; GPS time-of-week values are added
      to the week start as is, matching the navigation files they are paired
      with.
    """

    GPS_EPOCH = datetime(1980, 1, 6, tzinfo=timezone.utc)
    SECONDS_PER_DAY = 86400
    SECONDS_PER_WEEK = 7 * 86400

    @classmethod
    def parse_filename_date(cls, path: Union[str, Path]) -> Tuple[int, int, int]:
        """Extract (year, month, day) from a ``..._YYMMDD_HHMM.pgps`` name.

        Two-digit years are taken as 2000 + YY.

        Raises:
            FilenameDateError: if the six characters at the date offset are not
                digits or do not form a calendar date
        """
        name = str(path)
        offset = get_global_config().date_offset
        if len(name) < offset:
            raise FilenameDateError(f"Filename too short to carry a date: {name}")

        start = len(name) - offset
        match = _DATE_PATTERN.fullmatch(name[start:start + 6])
        if match is None:
            raise FilenameDateError(f"No YYMMDD date at the expected position in {name}")

        year, month, day = (int(part) for part in match.groups())
        year += 2000
        try:
            datetime(year, month, day)
        except ValueError as e:
            raise FilenameDateError(f"Invalid date in {name}: {e}") from e
        return year, month, day

    @classmethod
    def week_start(cls, year: int, month: int, day: int) -> int:
        """Return Unix seconds of the GPS week start containing the date.

        Day of week uses 0=Sunday..6=Saturday, so subtracting that many days
        from the date's midnight lands on the Saturday/Sunday midnight
        (Sunday 00:00:00) at or before the date.
        """
        midnight = datetime(year, month, day, tzinfo=get_global_config().time_zone)
        day_of_week = (midnight.weekday() + 1) % 7
        start = midnight - timedelta(days=day_of_week)
        return int(start.timestamp())

    @classmethod
    def week_start_from_filename(cls, path: Union[str, Path]) -> int:
        """Resolve the GPS week start for the date embedded in a filename."""
        return cls.week_start(*cls.parse_filename_date(path))

    @staticmethod
    def timestamp_us(week_start: int, time_of_week: float) -> int:
        """Absolute microseconds since the Unix epoch for a time-of-week."""
        return int((float(week_start) + time_of_week) * 1000000.0)

    @classmethod
    def gps_week_number(cls, week_start: int) -> int:
        """Return the GPS week number (weeks since 1980-01-06)."""
        delta = week_start - int(cls.GPS_EPOCH.timestamp())
        return delta // cls.SECONDS_PER_WEEK


__all__ = ["GNSSTime"]
