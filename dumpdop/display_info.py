import sys

from dumpdop.data_models import CorrelationStats


def print_progress(percent: int, stream=None):
    stream = stream or sys.stderr
    stream.write(f"{percent:02d}% processed \r")
    stream.flush()


def print_done(stream=None):
    stream = stream or sys.stderr
    stream.write("100% processed\r")
    stream.flush()


def print_summary(stats: CorrelationStats, stream=None):
    stream = stream or sys.stderr
    stream.write(f"Number of records: {stats.records}\n")
    stream.write(f"Minimum HDOP: {stats.min_hdop:f}\n")
    stream.write(f"Maximum HDOP: {stats.max_hdop:f}\n")
    stream.write(f"Minimum VDOP: {stats.min_vdop:f}\n")
    stream.write(f"Maximum VDOP: {stats.max_vdop:f}\n")
    stream.write(f"Matched: {stats.matched} | No navigation fix: {stats.skipped}\n\n\n")
    stream.flush()
