"""
Tests for the .pgps record reader.
"""

import pytest

from dumpdop.gps_reader import GPS_RECORD_DTYPE, GPSRecordReader, open_gps_file

from conftest import pgps_bytes, stream


class TestGPSRecordReader:
    """Tests for GPSRecordReader."""

    def test_record_size(self):
        assert GPS_RECORD_DTYPE.itemsize == 16

    def test_counts_records_from_size(self):
        reader = GPSRecordReader(stream(pgps_bytes([(0.0, 1.0, 2.0)] * 5)))
        assert reader.size == 80
        assert reader.num_records == 5

    def test_decodes_fields(self):
        reader = GPSRecordReader(stream(pgps_bytes([(345600.25, 1.25, 2.5)])))
        record = reader.read_record()

        assert record.time_of_week == 345600.25
        assert record.hdop == 1.25
        assert record.vdop == 2.5
        assert reader.read_record() is None

    def test_dop_values_are_float32(self):
        reader = GPSRecordReader(stream(pgps_bytes([(0.0, 0.1, 0.2)])))
        record = reader.read_record()
        # 0.1 is not representable; the float32 rounding must survive decoding
        assert record.hdop != 0.1
        assert record.hdop == pytest.approx(0.1, rel=1e-6)

    def test_iterates_in_order(self):
        data = pgps_bytes([(float(t), 1.0, 1.0) for t in range(4)])
        times = [r.time_of_week for r in GPSRecordReader(stream(data))]
        assert times == [0.0, 1.0, 2.0, 3.0]

    def test_truncated_final_record_is_end_of_stream(self):
        data = pgps_bytes([(0.0, 1.0, 2.0), (1.0, 3.0, 4.0)]) + b"\x00" * 9
        reader = GPSRecordReader(stream(data))

        assert reader.num_records == 2
        records = list(reader)
        assert len(records) == 2
        assert records[-1].hdop == 3.0

    def test_empty_stream(self):
        reader = GPSRecordReader(stream(b""))
        assert reader.num_records == 0
        assert reader.read_record() is None

    def test_tell_tracks_bytes_consumed(self):
        reader = GPSRecordReader(stream(pgps_bytes([(0.0, 1.0, 1.0)] * 3)))
        reader.read_record()
        assert reader.tell() == 16

    def test_open_gps_file(self, tmp_path):
        path = tmp_path / "a_060512_1530.pgps"
        path.write_bytes(pgps_bytes([(5.0, 1.0, 2.0)]))
        with open_gps_file(path) as reader:
            assert reader.read_record().time_of_week == 5.0
