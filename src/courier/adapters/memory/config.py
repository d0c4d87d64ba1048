"""In-memory configuration adapters for testing.

Provides configuration functions that satisfy the same Protocols as
production adapters but operate entirely in memory -- no filesystem,
no lib_layered_config file discovery.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from lib_layered_config import Config

from ...domain.enums import OutputFormat


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def make_get_config_in_memory(data: Mapping[str, Any]) -> Callable[..., Config]:
    """Return a ``GetConfig`` callable that always yields ``data``.

    Example:
        >>> get_config = make_get_config_in_memory({"sparkpost": {"api_key": "k"}})
        >>> get_config(profile=None).as_dict()["sparkpost"]["api_key"]
        'k'
    """
    snapshot = dict(data)

    def get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
        return Config(dict(snapshot), {})

    return get_config


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """No-op display -- satisfies the DisplayConfig protocol."""


__all__ = [
    "display_config_in_memory",
    "get_config_in_memory",
    "make_get_config_in_memory",
]
