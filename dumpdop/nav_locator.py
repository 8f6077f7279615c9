"""
Time-ordered lookup of navigation fixes for a stream of GPS timestamps.

Navigation files are sampled much faster than the DOP output and both are in
time order, so the locator walks the navigation stream forward once over the
whole run. Each query only advances the cursor; nothing is ever re-read.

Matching:
  - the cursor advances while the lookahead record is earlier than the target
  - an identical timestamp is always a match
  - a target before the first navigation record is not covered (no match)
  - 'nearest' picks the closer of the two records bracketing the target;
    on an exact midpoint `tie_break` decides ('earlier' by default)
  - 'exact' only accepts identical timestamps
  - `max_gap_seconds` (nearest only) rejects fixes farther than the gap
  - once the stream runs out before reaching a target, every later query
    returns None without touching the file
"""
import logging
import math
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

import numpy as np

from dumpdop.data_models import NavRecord
from dumpdop.global_config import get_match_settings
from dumpdop.nav_formats import NavLayout, detect_nav_layout

logger = logging.getLogger(__name__)


class NavRecordLocator:
    """
    Forward-only nearest-timestamp search over an SBET or POS stream.

    Attributes:
        layout (NavLayout): Record layout chosen when the file was opened
        records_read (int): Navigation records decoded so far (never decreases)
        exhausted (bool): End-of-stream latch
    """

    def __init__(
        self,
        fp: BinaryIO,
        layout: NavLayout,
        week_start: int,
        match_policy: Optional[str] = None,
        max_gap_seconds: Optional[float] = None,
        tie_break: Optional[str] = None,
    ):
        settings = get_match_settings()
        self.fp = fp
        self.layout = layout
        self.week_start = week_start
        self.match_policy = match_policy or settings.policy
        self.tie_break = tie_break or settings.tie_break
        if max_gap_seconds is None:
            max_gap_seconds = settings.max_gap_seconds
        if max_gap_seconds is not None and not 0 <= max_gap_seconds < math.inf:
            raise ValueError(f"Invalid max gap: {max_gap_seconds}. Use a finite value >= 0")
        self.max_gap_us = None if max_gap_seconds is None else int(max_gap_seconds * 1000000)

        if self.match_policy not in ("nearest", "exact"):
            raise ValueError(f"Invalid match policy: {self.match_policy}")
        if self.tie_break not in ("earlier", "later"):
            raise ValueError(f"Invalid tie break: {self.tie_break}")

        self._buffer = bytearray(layout.record_size)
        self._view = np.frombuffer(self._buffer, dtype=layout.dtype)

        self.records_read = 0
        self.exhausted = False
        self._prev: Optional[NavRecord] = None
        self._next: Optional[NavRecord] = None
        self._last_target: Optional[int] = None

    def _read_next(self) -> Optional[NavRecord]:
        count = self.fp.readinto(self._buffer)
        if count < self.layout.record_size:
            if count:
                logger.debug(f"Truncated {self.layout.name} record ({count} bytes) at end of stream")
            return None
        self.records_read += 1
        return self.layout.decode(self._view[0], self.week_start)

    def find(self, target: int) -> Optional[NavRecord]:
        """
        Return the navigation fix matching `target` (microseconds), or None.

        Targets are expected in non-decreasing order across calls.
        """
        if self.exhausted:
            return None

        if self._last_target is not None and target < self._last_target:
            logger.debug(f"Out of order query {target} < {self._last_target}; cursor is not rewound")
        self._last_target = target

        while self._next is None or self._next.timestamp < target:
            record = self._read_next()
            if record is None:
                self.exhausted = True
                self._next = None
                logger.debug(f"{self.layout.name} stream exhausted after {self.records_read} records")
                return None
            self._prev = self._next
            self._next = record

        if self._next.timestamp == target:
            return self._next

        if self.match_policy == "exact" or self._prev is None:
            return None

        before = target - self._prev.timestamp
        after = self._next.timestamp - target
        if before < after or (before == after and self.tie_break == "earlier"):
            best, gap = self._prev, before
        else:
            best, gap = self._next, after

        if self.max_gap_us is not None and abs(gap) > self.max_gap_us:
            return None
        return best


@contextmanager
def open_nav_file(
    path: Union[str, Path],
    week_start: int,
    layout: Optional[NavLayout] = None,
    **match_options,
) -> Iterator[NavRecordLocator]:
    """Open an SBET or POS file, detecting its layout unless one is given."""
    if layout is None:
        layout = detect_nav_layout(path)
    logger.info(f"Opening {layout.name} navigation file {path}")
    with open(path, "rb") as fp:
        yield NavRecordLocator(fp, layout, week_start, **match_options)
