"""
Shared fixtures: binary .pgps / SBET / POS builders.
"""

import io
import math
from datetime import datetime, timezone

import numpy as np
import pytest

from dumpdop.global_config import reset_global_config
from dumpdop.gps_reader import GPS_RECORD_DTYPE
from dumpdop.nav_formats import POS_DTYPE, SBET_DTYPE

# LD_060512_1530.pgps -> Friday 2006-05-12, GPS week starts Sunday 2006-05-07
GPS_FILENAME = "LD_060512_1530.pgps"
WEEK_START = int(datetime(2006, 5, 7, tzinfo=timezone.utc).timestamp())


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from default settings."""
    yield reset_global_config()
    reset_global_config()


def pgps_bytes(records):
    """records: iterable of (gps_time, hdop, vdop)."""
    data = np.array(list(records), dtype=GPS_RECORD_DTYPE)
    return data.tobytes()


def sbet_bytes(records):
    """records: iterable of (time_of_week, lat_deg, lon_deg)."""
    data = np.zeros(len(records), dtype=SBET_DTYPE)
    for i, (tow, lat, lon) in enumerate(records):
        data["time"][i] = tow
        data["latitude"][i] = math.radians(lat)
        data["longitude"][i] = math.radians(lon)
        data["altitude"][i] = 25.0
    return data.tobytes()


def pos_bytes(records):
    """records: iterable of (timestamp_us, lat_deg, lon_deg)."""
    data = np.zeros(len(records), dtype=POS_DTYPE)
    for i, (ts, lat, lon) in enumerate(records):
        data["timestamp"][i] = ts
        data["latitude"][i] = lat
        data["longitude"][i] = lon
    return data.tobytes()


def us(tow):
    """Absolute microseconds for a time-of-week in the test week."""
    return int((WEEK_START + tow) * 1000000.0)


@pytest.fixture
def gps_dir(tmp_path):
    """Directory layout with a .pgps file and an SBET next to it."""
    gps_path = tmp_path / GPS_FILENAME
    gps_path.write_bytes(pgps_bytes([
        (0.0, 1.5, 2.5),
        (10.0, 0.9, 1.8),
        (20.0, 1.2, 3.1),
    ]))
    (tmp_path / "LD_060512_1530.out").write_bytes(sbet_bytes([
        (10.0, 30.5, -88.25),
    ]))
    return tmp_path


def stream(data: bytes) -> io.BytesIO:
    return io.BytesIO(data)
