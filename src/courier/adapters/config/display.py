"""Render the effective configuration through lib_layered_config.

Pending lib_log_rich output is flushed first so log lines never interleave
with the rendered configuration. The SparkPost API key is masked before
rendering.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _render
from rich.console import Console

from courier.domain.enums import OutputFormat

REDACTED = "***REDACTED***"


def _mask_api_key(config: Config) -> Config:
    """Return ``config`` with a configured ``sparkpost.api_key`` replaced by :data:`REDACTED`.

    Example:
        >>> _mask_api_key(Config({"sparkpost": {"api_key": "k"}}, {}))["sparkpost"]["api_key"]
        '***REDACTED***'
        >>> cfg = Config({"sparkpost": {"api_key": ""}}, {})
        >>> _mask_api_key(cfg) is cfg
        True
    """
    section: Any = config.get("sparkpost", default={})
    if not isinstance(section, Mapping):
        return config
    if not cast(Mapping[str, Any], section).get("api_key"):
        return config
    return config.with_overrides({"sparkpost": {"api_key": REDACTED}})


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print ``config`` (or one ``section`` of it) with provenance comments.

    Args:
        config: Loaded layered configuration.
        output_format: ``HUMAN`` for annotated TOML-like output, ``JSON`` for JSON.
        section: Restrict output to one top-level section, e.g. ``sparkpost``.
        console: Rich console to write to; tests pass a recording console.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: When ``section`` does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _render(
        _mask_api_key(config),
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["REDACTED", "display_config"]
