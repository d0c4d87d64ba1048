"""Application ports: Protocol definitions for couriers, transports and services.

:class:`Courier` and :class:`SendTransmission` are object protocols: any
provider adapter exposing a matching ``send`` method satisfies them. The
remaining classes define a ``__call__`` method whose signature exactly matches
the corresponding adapter function, so module-level functions satisfy them
via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``SparkPostConfig``, ``Transmission``) are imported under
    ``TYPE_CHECKING`` only so that import-linter layer contracts remain
    satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..domain.email import Email
from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.sparkpost.config import SparkPostConfig
    from ..adapters.sparkpost.courier import SparkPostCourier
    from ..adapters.sparkpost.transmission import Transmission


@runtime_checkable
class Courier(Protocol):
    """Sends emails through a third-party provider."""

    def send(self, email: Email) -> str:
        """Send ``email`` and return the provider's receipt id.

        Raises:
            CourierError: When the email cannot be mapped or delivered.
        """
        ...


class SendTransmission(Protocol):
    """Delivers one provider-specific transmission request."""

    def send(self, transmission: Transmission) -> str:
        """Submit ``transmission`` and return the transmission id.

        Raises:
            DeliveryError: When the provider rejects the request or is unreachable.
        """
        ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadSparkPostConfigFromDict(Protocol):
    """Load SparkPostConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> SparkPostConfig: ...


class BuildCourier(Protocol):
    """Create a ready-to-use courier from validated provider settings."""

    def __call__(self, config: SparkPostConfig) -> SparkPostCourier: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "BuildCourier",
    "Courier",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadSparkPostConfigFromDict",
    "SendTransmission",
]
