"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks (CLI, configuration, SparkPost, logging).

Contents:
    * :mod:`.config` - Configuration loading, overrides, and display
    * :mod:`.sparkpost` - Email delivery through the SparkPost REST API
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
