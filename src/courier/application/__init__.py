"""Application layer - port definitions.

Contains the protocols that provider adapters and infrastructure services
implement.

Contents:
    * :mod:`.ports` - Courier, transport, and callable service protocols
"""

from __future__ import annotations

from .ports import (
    BuildCourier,
    Courier,
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadSparkPostConfigFromDict,
    SendTransmission,
)

__all__ = [
    "BuildCourier",
    "Courier",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadSparkPostConfigFromDict",
    "SendTransmission",
]
