"""
Tests for the .trk writer and its header rewrite.
"""

import io

import pytest

from dumpdop.exceptions import HeaderOverflowError
from dumpdop.track_writer import TrackWriter, open_track_file


class TestTrackWriter:
    """Tests for TrackWriter."""

    def test_placeholder_then_rewrite(self):
        buf = io.BytesIO()
        writer = TrackWriter(buf)
        writer.write_placeholder()
        assert buf.getvalue() == b"MINMAX 00.0000 00.0000\n"

        writer.write_point(30.5, -88.25, 1.8)
        writer.finalize(0.9, 3.1)

        lines = buf.getvalue().decode().splitlines()
        assert lines[0] == "MINMAX 00.9000 03.1000"
        assert lines[1] == "0,0,0,30.500000,-88.250000,1.800000"

    def test_header_width_never_changes(self):
        buf = io.BytesIO()
        writer = TrackWriter(buf)
        writer.write_placeholder()
        writer.write_point(1.0, 2.0, 3.0)
        before = len(buf.getvalue())

        writer.finalize(1.0, 2.0)

        assert len(buf.getvalue()) == before
        assert buf.getvalue().decode().splitlines()[1] == "0,0,0,1.000000,2.000000,3.000000"

    def test_header_overflow_with_data_raises(self):
        buf = io.BytesIO()
        writer = TrackWriter(buf)
        writer.write_placeholder()
        writer.write_point(1.0, 2.0, 3.0)

        with pytest.raises(HeaderOverflowError):
            writer.finalize(999.0, -999.0)
        # First data line left intact
        assert buf.getvalue().decode().splitlines()[1] == "0,0,0,1.000000,2.000000,3.000000"

    def test_header_overflow_without_data_is_written(self):
        buf = io.BytesIO()
        writer = TrackWriter(buf)
        writer.write_placeholder()
        writer.finalize(999.0, -999.0)
        assert buf.getvalue() == b"MINMAX 999.0000 -999.0000\n"

    def test_lines_written(self):
        writer = TrackWriter(io.BytesIO())
        writer.write_placeholder()
        for _ in range(3):
            writer.write_point(0.0, 0.0, 1.0)
        assert writer.lines_written == 3

    def test_open_track_file(self, tmp_path):
        path = tmp_path / "out.trk"
        with open_track_file(path) as writer:
            writer.write_placeholder()
            writer.write_point(10.0, 20.0, 1.5)
            writer.finalize(1.5, 1.5)
        assert path.read_text() == "MINMAX 01.5000 01.5000\n0,0,0,10.000000,20.000000,1.500000\n"
