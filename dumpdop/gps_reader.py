"""
Sequential reader for Optech .pgps GPS processing output.

Each record is a fixed 16 byte little-endian unit:

    gps_time  float64   seconds of GPS week
    HDOP      float32
    VDOP      float32
"""
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

import numpy as np

from dumpdop.data_models import GpsRecord

logger = logging.getLogger(__name__)

GPS_RECORD_DTYPE = np.dtype([
    ("gps_time", "<f8"),
    ("hdop", "<f4"),
    ("vdop", "<f4"),
])


class GPSRecordReader:
    """
    Forward-only decoder over a binary .pgps stream.

    Attributes:
        size (int): Stream length in bytes
        num_records (int): Complete records in the stream
    """

    def __init__(self, fp: BinaryIO):
        self.fp = fp
        start = fp.tell()
        fp.seek(0, os.SEEK_END)
        self.size = fp.tell()
        fp.seek(start, os.SEEK_SET)

        self.num_records = self.size // GPS_RECORD_DTYPE.itemsize
        self._buffer = bytearray(GPS_RECORD_DTYPE.itemsize)
        self._view = np.frombuffer(self._buffer, dtype=GPS_RECORD_DTYPE)

        if self.size % GPS_RECORD_DTYPE.itemsize:
            logger.warning(
                f"GPS stream has {self.size % GPS_RECORD_DTYPE.itemsize} trailing bytes; "
                f"the partial last record will be ignored"
            )

    def tell(self) -> int:
        """Bytes consumed so far."""
        return self.fp.tell()

    def read_record(self) -> Optional[GpsRecord]:
        """
        Decode the next record.

        Returns:
            GpsRecord, or None at end of stream (including a truncated record)
        """
        count = self.fp.readinto(self._buffer)
        if count < GPS_RECORD_DTYPE.itemsize:
            if count:
                logger.debug(f"Truncated GPS record ({count} bytes) treated as end of stream")
            return None

        rec = self._view[0]
        return GpsRecord(
            time_of_week=float(rec["gps_time"]),
            hdop=float(rec["hdop"]),
            vdop=float(rec["vdop"]),
        )

    def __iter__(self) -> Iterator[GpsRecord]:
        while True:
            record = self.read_record()
            if record is None:
                return
            yield record


@contextmanager
def open_gps_file(path: Union[str, Path]) -> Iterator[GPSRecordReader]:
    """Open a .pgps file for sequential reading."""
    with open(path, "rb") as fp:
        yield GPSRecordReader(fp)
