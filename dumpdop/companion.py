"""
Default lookup of the SBET or POS file that goes with a .pgps file.

The correlation code only sees a resolver callable ``resolve(gps_path)``;
callers with other naming schemes pass their own.
"""
import logging
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from dumpdop.exceptions import CompanionFileNotFoundError
from dumpdop.global_config import get_global_config

logger = logging.getLogger(__name__)

CompanionResolver = Callable[[Path], Optional[Path]]


def _candidates(gps_path: Path) -> Iterator[Path]:
    config = get_global_config()
    directories = [gps_path.parent, gps_path.parent.parent / "pos"]
    # Reprocessed SBET files take precedence over real-time POS output
    for ext in config.sbet_extensions + config.pos_extensions:
        for directory in directories:
            yield directory / f"{gps_path.stem}{ext}"


def resolve_companion_path(gps_path: Union[str, Path]) -> Optional[Path]:
    """
    Look for ``<stem>.out``/``<stem>.sbet`` then ``<stem>.pos`` next to the
    GPS file and in a sibling ``pos`` directory.

    Returns:
        Path of the first existing candidate, or None
    """
    for candidate in _candidates(Path(gps_path)):
        if candidate.is_file():
            logger.debug(f"Companion navigation file: {candidate}")
            return candidate
    return None


def require_companion_path(
    gps_path: Union[str, Path],
    resolver: CompanionResolver = resolve_companion_path,
) -> Path:
    """
    Resolve the navigation file or fail.

    Raises:
        CompanionFileNotFoundError: if the resolver finds nothing
    """
    path = resolver(Path(gps_path))
    if path is None:
        raise CompanionFileNotFoundError(f"Couldn't find an SBET or POS file for {gps_path}")
    return Path(path)
