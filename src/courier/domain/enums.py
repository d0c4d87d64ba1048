"""Type-safe domain enums."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class ContentKind(str, Enum):
    """Which body variant an email carries, used in log records and CLI output.

    Example:
        >>> ContentKind.TEMPLATED.value
        'templated'
    """

    SIMPLE = "simple"
    TEMPLATED = "templated"


__all__ = [
    "ContentKind",
    "OutputFormat",
]
