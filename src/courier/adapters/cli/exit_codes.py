"""Exit codes returned by ``courier`` commands.

Values follow ``sysexits.h`` and errno numbering so scripts can tell a bad
invocation apart from a provider outage.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit status for each failure class.

    * 2: ENOENT, an attachment path does not exist
    * 22: EINVAL, invalid option values, malformed sender, unsupported content
    * 69: EX_UNAVAILABLE, SparkPost rejected the request or was unreachable
    * 74: EX_IOERR, an attachment could not be read
    * 78: EX_CONFIG, no API key or an invalid ``[sparkpost]`` section

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE)
        69
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69
    IO_ERROR = 74
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
