"""
Global Configuration Module

This module provides a centralized configuration storage for the DOP dump run
(file naming conventions, navigation matching policy and time reference) that
can be accessed by all functions throughout the application.
"""

import logging
import os
import time
from datetime import timezone, tzinfo
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field


@dataclass
class MatchSettings:
    """
    Data class representing how GPS samples are paired with navigation records.
    """
    policy: str = "nearest"  # "nearest" or "exact"

    # Reject nearest matches farther away than this (None = unbounded)
    max_gap_seconds: Optional[float] = None

    # Which neighbour wins when the target sits exactly between two records
    tie_break: str = "earlier"  # "earlier" or "later"


@dataclass
class GlobalConfig:
    """
    Global configuration container for the entire application.
    """
    input_extension: str = ".pgps"
    output_extension: str = ".trk"

    # YYMMDD starts this many characters before the end of the input path
    date_offset: int = 16

    header_placeholder: str = "MINMAX 00.0000 00.0000"

    # Companion navigation file extensions, preferred order first
    sbet_extensions: List[str] = field(default_factory=lambda: [".out", ".sbet"])
    pos_extensions: List[str] = field(default_factory=lambda: [".pos"])

    match_settings: MatchSettings = field(default_factory=MatchSettings)

    time_zone: tzinfo = timezone.utc

    def get_match_settings(self) -> MatchSettings:
        """Return the navigation matching settings."""
        return self.match_settings

    def update_match_settings(self, settings: Dict[str, Any]) -> None:
        """
        Update navigation matching settings.

        Args:
            settings: Dictionary containing the settings to update

        Raises:
            ValueError: If policy or tie_break has an unknown value
        """
        policy = settings.get("policy", self.match_settings.policy)
        if policy not in ("nearest", "exact"):
            raise ValueError(f"Invalid match policy: {policy}. Use 'nearest' or 'exact'")
        tie_break = settings.get("tie_break", self.match_settings.tie_break)
        if tie_break not in ("earlier", "later"):
            raise ValueError(f"Invalid tie break: {tie_break}. Use 'earlier' or 'later'")

        for key, value in settings.items():
            if hasattr(self.match_settings, key):
                setattr(self.match_settings, key, value)

    def update_general_settings(self, settings: Dict[str, Any]) -> None:
        """
        Update general settings like extensions and the date offset.

        Args:
            settings: Dictionary containing the general settings to update
        """
        for key, value in settings.items():
            if hasattr(self, key):
                setattr(self, key, value)


# Create a singleton instance of GlobalConfig that can be imported and used globally
global_config = GlobalConfig()


def get_global_config() -> GlobalConfig:
    """
    Get the global configuration instance.

    Returns:
        GlobalConfig instance
    """
    return global_config


def get_match_settings() -> MatchSettings:
    """Convenience function to get the navigation matching settings."""
    return global_config.get_match_settings()


def update_match_settings(settings: Dict[str, Any]) -> None:
    """Convenience function to update the navigation matching settings."""
    global_config.update_match_settings(settings)


def update_general_settings(settings: Dict[str, Any]) -> None:
    """
    Convenience function to update general settings.

    Args:
        settings: Dictionary containing the general settings to update
    """
    global_config.update_general_settings(settings)


def reset_global_config() -> GlobalConfig:
    """Restore every setting to its default value."""
    global global_config
    global_config = GlobalConfig()
    return global_config


def configure_utc_timezone() -> None:
    """
    Put the process time reference on UTC.

    Run once at startup, before any date arithmetic. Repeating the call has no
    further effect. Date computations use ``GlobalConfig.time_zone``; this also
    moves C-level local time and log record timestamps onto UTC so nothing in
    the process depends on the host locale.
    """
    global_config.time_zone = timezone.utc
    if os.environ.get("TZ") != "UTC":
        os.environ["TZ"] = "UTC"
        if hasattr(time, "tzset"):
            time.tzset()
    logging.Formatter.converter = time.gmtime
