"""SparkPost adapter - email delivery through the SparkPost REST API.

Structure:
    * :mod:`.config` - Provider configuration model and loader
    * :mod:`.transmission` - Request body models
    * :mod:`.courier` - Email to transmission mapping
    * :mod:`.transport` - httpx transport for the transmissions endpoint

Contents:
    * :class:`.config.SparkPostConfig` - Provider settings container
    * :func:`.config.load_sparkpost_config_from_dict` - Config dict loader
    * :class:`.courier.SparkPostCourier` - Courier implementation
    * :class:`.transport.SparkPostTransport` - HTTP transport
    * :func:`build_courier` - Production wiring of courier and transport
"""

from __future__ import annotations

from .config import DEFAULT_BASE_URL, SparkPostConfig, load_sparkpost_config_from_dict
from .courier import SparkPostCourier
from .transmission import Transmission
from .transport import SparkPostTransport


def build_courier(config: SparkPostConfig) -> SparkPostCourier:
    """Return a courier that delivers through a fresh :class:`SparkPostTransport`.

    Raises:
        ConfigurationError: When ``config.api_key`` is not set.
    """
    return SparkPostCourier(SparkPostTransport(config))


__all__ = [
    "DEFAULT_BASE_URL",
    "SparkPostConfig",
    "SparkPostCourier",
    "SparkPostTransport",
    "Transmission",
    "build_courier",
    "load_sparkpost_config_from_dict",
]
