"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.transmission` - In-memory transport adapters (TransmissionSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    make_get_config_in_memory,
)
from .logging import init_logging_in_memory
from .transmission import (
    TransmissionSpy,
    load_sparkpost_config_from_dict_in_memory,
)

# Static conformance assertions
if TYPE_CHECKING:
    from courier.application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadSparkPostConfigFromDict,
        SendTransmission,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_sparkpost_config: LoadSparkPostConfigFromDict = load_sparkpost_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_send_transmission: SendTransmission = TransmissionSpy()

__all__ = [
    "TransmissionSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_sparkpost_config_from_dict_in_memory",
    "make_get_config_in_memory",
]
