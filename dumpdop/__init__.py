"""
dumpdop - DOP extraction from .pgps files, correlated with SBET/POS navigation.
"""

from dumpdop.correlation import DopCorrelator
from dumpdop.data_models import CorrelationStats, GpsRecord, NavRecord
from dumpdop.gnss_time import GNSSTime
from dumpdop.gps_reader import GPSRecordReader, open_gps_file
from dumpdop.nav_locator import NavRecordLocator, open_nav_file
from dumpdop.track_writer import TrackWriter, open_track_file

__version__ = "0.1"

__all__ = [
    "DopCorrelator",
    "CorrelationStats",
    "GpsRecord",
    "NavRecord",
    "GNSSTime",
    "GPSRecordReader",
    "open_gps_file",
    "NavRecordLocator",
    "open_nav_file",
    "TrackWriter",
    "open_track_file",
]
