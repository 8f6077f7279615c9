"""
Binary layouts of the two navigation solution files paired with .pgps data.

SBET (Smoothed Best Estimate of Trajectory, reprocessed) -- 17 float64, 136 bytes:

    time            seconds of GPS week
    latitude        radians
    longitude       radians
    altitude        meters
    x/y/z velocity  m/s
    roll, pitch, platform heading, wander angle      radians
    x/y/z body acceleration                          m/s^2
    x/y/z body angular rate                          rad/s

POS (real-time output) -- 56 bytes:

    timestamp       int64, microseconds since Unix epoch
    latitude        float64 degrees
    longitude       float64 degrees
    altitude        float64 meters
    roll, pitch, heading                             float64 degrees

Both decode to the same NavRecord {timestamp us, latitude rad, longitude rad}.
"""
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

import numpy as np

from dumpdop.data_models import NavRecord
from dumpdop.exceptions import UnknownNavFormatError
from dumpdop.global_config import get_global_config
from dumpdop.gnss_time import GNSSTime

SBET_DTYPE = np.dtype([
    ("time", "<f8"),
    ("latitude", "<f8"),
    ("longitude", "<f8"),
    ("altitude", "<f8"),
    ("x_velocity", "<f8"),
    ("y_velocity", "<f8"),
    ("z_velocity", "<f8"),
    ("roll", "<f8"),
    ("pitch", "<f8"),
    ("platform_heading", "<f8"),
    ("wander_angle", "<f8"),
    ("x_body_accel", "<f8"),
    ("y_body_accel", "<f8"),
    ("z_body_accel", "<f8"),
    ("x_body_angular_rate", "<f8"),
    ("y_body_angular_rate", "<f8"),
    ("z_body_angular_rate", "<f8"),
])

POS_DTYPE = np.dtype([
    ("timestamp", "<i8"),
    ("latitude", "<f8"),
    ("longitude", "<f8"),
    ("altitude", "<f8"),
    ("roll", "<f8"),
    ("pitch", "<f8"),
    ("heading", "<f8"),
])


def _decode_sbet(rec, week_start: int) -> NavRecord:
    return NavRecord(
        timestamp=GNSSTime.timestamp_us(week_start, float(rec["time"])),
        latitude=float(rec["latitude"]),
        longitude=float(rec["longitude"]),
    )


def _decode_pos(rec, week_start: int) -> NavRecord:
    # POS records are already absolute; week_start is unused
    return NavRecord(
        timestamp=int(rec["timestamp"]),
        latitude=math.radians(float(rec["latitude"])),
        longitude=math.radians(float(rec["longitude"])),
    )


@dataclass(frozen=True)
class NavLayout:
    """One on-disk navigation record layout and its decoder."""
    name: str
    dtype: np.dtype
    decode: Callable[..., NavRecord]

    @property
    def record_size(self) -> int:
        return self.dtype.itemsize


SBET_LAYOUT = NavLayout("SBET", SBET_DTYPE, _decode_sbet)
POS_LAYOUT = NavLayout("POS", POS_DTYPE, _decode_pos)


def detect_nav_layout(path: Union[str, Path]) -> NavLayout:
    """
    Pick the navigation layout for a file.

    The extension decides first. Otherwise the file size must be a whole
    multiple of exactly one of the record sizes.

    Raises:
        UnknownNavFormatError: if neither rule identifies a single layout
    """
    config = get_global_config()
    suffix = Path(path).suffix.lower()
    if suffix in config.sbet_extensions:
        return SBET_LAYOUT
    if suffix in config.pos_extensions:
        return POS_LAYOUT

    size = os.path.getsize(path)
    candidates = [
        layout for layout in (SBET_LAYOUT, POS_LAYOUT)
        if size and size % layout.record_size == 0
    ]
    if len(candidates) != 1:
        raise UnknownNavFormatError(f"Cannot tell whether {path} is an SBET or POS file")
    return candidates[0]
