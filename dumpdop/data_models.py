"""
Data models for DOP samples, navigation fixes and run statistics.
"""
from dataclasses import dataclass

DOP_TYPES = ("HDOP", "VDOP")


def normalize_dop_type(dop_type: str) -> str:
    """Return 'HDOP' or 'VDOP' for any casing, ValueError otherwise."""
    value = dop_type.upper()
    if value not in DOP_TYPES:
        raise ValueError(f"Invalid DOP type: {dop_type}. Use 'HDOP' or 'VDOP'")
    return value


@dataclass(frozen=True)
class GpsRecord:
    """
    One DOP sample from a .pgps file.
    """
    time_of_week: float   # seconds since start of GPS week
    hdop: float           # stored as float32
    vdop: float           # stored as float32

    def dop(self, dop_type: str) -> float:
        return self.hdop if dop_type == "HDOP" else self.vdop


@dataclass(frozen=True)
class NavRecord:
    """
    Logical navigation fix shared by the SBET and POS layouts.
    """
    timestamp: int        # microseconds since Unix epoch
    latitude: float       # radians
    longitude: float      # radians


@dataclass
class CorrelationStats:
    """
    Running DOP bounds and record counters for one run.

    Bounds start at out-of-range sentinels and only ever tighten.
    """
    min_hdop: float = 999.0
    max_hdop: float = -999.0
    min_vdop: float = 999.0
    max_vdop: float = -999.0

    records: int = 0   # GPS records consumed
    matched: int = 0   # output lines written
    skipped: int = 0   # GPS records with no navigation match

    def update(self, record: GpsRecord) -> None:
        self.records += 1
        if record.hdop < self.min_hdop:
            self.min_hdop = record.hdop
        if record.hdop > self.max_hdop:
            self.max_hdop = record.hdop
        if record.vdop < self.min_vdop:
            self.min_vdop = record.vdop
        if record.vdop > self.max_vdop:
            self.max_vdop = record.vdop

    def bounds(self, dop_type: str):
        """Return (min, max) for the selected DOP type."""
        if dop_type == "HDOP":
            return self.min_hdop, self.max_hdop
        return self.min_vdop, self.max_vdop
