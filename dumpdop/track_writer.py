"""
Writer for .trk track files.

Layout:

    MINMAX <min> <max>
    0,0,0,<lat_deg>,<lon_deg>,<dop>
    ...

The header is written as a placeholder first and overwritten in place once
the statistics are known, so its byte width must not grow while data lines
follow it.
"""
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from dumpdop.exceptions import HeaderOverflowError
from dumpdop.global_config import get_global_config

logger = logging.getLogger(__name__)


class TrackWriter:
    """
    Sequential .trk writer with a rewritable header slot.

    Attributes:
        lines_written (int): Data lines written after the header
    """

    def __init__(self, fp: BinaryIO, placeholder: Optional[str] = None):
        self.fp = fp
        self.placeholder = placeholder or get_global_config().header_placeholder
        self.lines_written = 0

    @property
    def header_width(self) -> int:
        return len(self.placeholder)

    def write_placeholder(self) -> None:
        """Write the placeholder header at the start of the stream."""
        self.fp.write(f"{self.placeholder}\n".encode("ascii"))

    def write_point(self, latitude_deg: float, longitude_deg: float, dop: float) -> None:
        self.fp.write(f"0,0,0,{latitude_deg:f},{longitude_deg:f},{dop:f}\n".encode("ascii"))
        self.lines_written += 1

    @staticmethod
    def format_header(min_dop: float, max_dop: float) -> str:
        return f"MINMAX {min_dop:07.4f} {max_dop:07.4f}"

    def finalize(self, min_dop: float, max_dop: float) -> None:
        """
        Overwrite the placeholder with the final min/max.

        Raises:
            HeaderOverflowError: if the header is wider than the placeholder
                and data lines follow it
        """
        header = self.format_header(min_dop, max_dop)
        if len(header) > self.header_width:
            if self.lines_written:
                raise HeaderOverflowError(
                    f"Header '{header}' does not fit in {self.header_width} characters"
                )
            logger.warning(f"No data lines written; header widened to '{header}'")
        else:
            header = header.ljust(self.header_width)

        self.fp.seek(0)
        self.fp.write(f"{header}\n".encode("ascii"))
        self.fp.flush()


@contextmanager
def open_track_file(path: Union[str, Path]) -> Iterator[TrackWriter]:
    """Create (or truncate) a .trk file for writing."""
    with open(path, "wb+") as fp:
        yield TrackWriter(fp)
