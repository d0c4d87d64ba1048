"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config

# Logging services
from ..adapters.logging.setup import init_logging

# Provider services
from ..adapters.sparkpost import build_courier, load_sparkpost_config_from_dict

# Static conformance assertions - pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.transmission import TransmissionSpy
    from ..application.ports import (
        BuildCourier,
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadSparkPostConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_load_sparkpost_config_from_dict: LoadSparkPostConfigFromDict = load_sparkpost_config_from_dict
    _assert_build_courier: BuildCourier = build_courier
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    init_logging: InitLogging
    load_sparkpost_config_from_dict: LoadSparkPostConfigFromDict
    build_courier: BuildCourier


def build_production() -> AppServices:
    """Wire production adapters: layered config, lib_log_rich and the httpx transport."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        init_logging=init_logging,
        load_sparkpost_config_from_dict=load_sparkpost_config_from_dict,
        build_courier=build_courier,
    )


def build_testing(*, spy: TransmissionSpy | None = None, config: Mapping[str, Any] | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    The real :class:`~courier.adapters.sparkpost.SparkPostCourier` mapping
    still runs; only the HTTP transport is replaced by the spy.

    Args:
        spy: Transport spy capturing transmissions. A fresh one is created
            when None; pass your own to assert on what was sent.
        config: Configuration data returned by ``get_config``. Empty when None.

    Example:
        >>> from courier.adapters.memory import TransmissionSpy
        >>> spy = TransmissionSpy()
        >>> services = build_testing(spy=spy, config={"sparkpost": {"api_key": "k"}})
        >>> services.load_sparkpost_config_from_dict(services.get_config().as_dict()).api_key
        'k'
    """
    from ..adapters.memory import (
        TransmissionSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_sparkpost_config_from_dict_in_memory,
        make_get_config_in_memory,
    )

    transmission_spy = spy if spy is not None else TransmissionSpy()

    return AppServices(
        get_config=make_get_config_in_memory(config) if config is not None else get_config_in_memory,
        display_config=display_config_in_memory,
        init_logging=init_logging_in_memory,
        load_sparkpost_config_from_dict=load_sparkpost_config_from_dict_in_memory,
        build_courier=transmission_spy.build_courier,
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Provider
    "build_courier",
    "load_sparkpost_config_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
