"""
Pairs every DOP sample of a .pgps file with a navigation fix and writes the
annotated track.

One linear pass over the GPS stream:
  - GPS time-of-week -> absolute microseconds via the run's GPS week start
  - HDOP/VDOP bounds are updated for every record, matched or not
  - the navigation locator is queried; a match produces one track line
  - progress (percent of GPS bytes consumed) is reported only when it changes
After the pass the track header is rewritten with the selected DOP bounds.
"""
import logging
import math
from typing import Callable, Optional

from dumpdop.data_models import CorrelationStats, normalize_dop_type
from dumpdop.gnss_time import GNSSTime
from dumpdop.gps_reader import GPSRecordReader
from dumpdop.nav_locator import NavRecordLocator
from dumpdop.track_writer import TrackWriter

logger = logging.getLogger(__name__)


class DopCorrelator:
    """Correlation driver for one GPS / navigation / track triple."""

    def __init__(
        self,
        gps_reader: GPSRecordReader,
        locator: NavRecordLocator,
        writer: TrackWriter,
        week_start: int,
        dop_type: str = "VDOP",
        progress: Optional[Callable[[int], None]] = None,
    ):
        self.gps_reader = gps_reader
        self.locator = locator
        self.writer = writer
        self.week_start = week_start
        self.dop_type = normalize_dop_type(dop_type)
        self.progress = progress
        self.stats = CorrelationStats()
        self._last_percent = -1

    def _report_progress(self) -> None:
        if self.progress is None or self.gps_reader.size == 0:
            return
        percent = int(self.gps_reader.tell() / self.gps_reader.size * 100.0)
        if percent != self._last_percent:
            self.progress(percent)
            self._last_percent = percent

    def run(self) -> CorrelationStats:
        """
        Process the whole GPS stream.

        Returns:
            CorrelationStats for the run
        """
        logger.info(
            f"Correlating {self.gps_reader.num_records} GPS records "
            f"(GPS week {GNSSTime.gps_week_number(self.week_start)}, {self.dop_type})"
        )
        self.writer.write_placeholder()

        for record in self.gps_reader:
            self.stats.update(record)

            timestamp = GNSSTime.timestamp_us(self.week_start, record.time_of_week)
            nav = self.locator.find(timestamp)
            if nav is not None:
                self.writer.write_point(
                    math.degrees(nav.latitude),
                    math.degrees(nav.longitude),
                    record.dop(self.dop_type),
                )
                self.stats.matched += 1
            else:
                self.stats.skipped += 1

            self._report_progress()

        self.writer.finalize(*self.stats.bounds(self.dop_type))

        logger.info(
            f"{self.stats.matched} of {self.stats.records} GPS records matched "
            f"({self.locator.records_read} {self.locator.layout.name} records read)"
        )
        return self.stats
