"""
Fatal error types raised while setting up or finishing a DOP dump.

End of a GPS or navigation stream is not an error and never raises.
"""


class DumpDopError(Exception):
    """Base class for fatal dump_dop errors."""


class FilenameDateError(DumpDopError, ValueError):
    """The input filename does not carry a usable YYMMDD date."""


class CompanionFileNotFoundError(DumpDopError, FileNotFoundError):
    """No SBET or POS file could be found for the GPS file."""


class UnknownNavFormatError(DumpDopError, ValueError):
    """The navigation file layout could not be determined."""


class HeaderOverflowError(DumpDopError):
    """The final MINMAX header does not fit in the placeholder slot."""
