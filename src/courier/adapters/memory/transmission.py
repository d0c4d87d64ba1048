"""In-memory transmission adapters for testing.

Provides a transport spy that satisfies the same Protocols as the
production SparkPost transport but performs no HTTP requests.

Contents:
    * :class:`TransmissionSpy` - Captures transmissions for test assertions.
    * :func:`load_sparkpost_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..sparkpost.config import SparkPostConfig
from ..sparkpost.courier import SparkPostCourier
from ..sparkpost.transmission import Transmission


def _empty_transmission_list() -> list[Transmission]:
    """Create an empty typed list for transmission records."""
    return []


def _empty_config_list() -> list[SparkPostConfig]:
    return []


@dataclass
class TransmissionSpy:
    """Captures transmissions for test assertions.

    Each test should create its own TransmissionSpy instance to avoid
    cross-test pollution. ``send`` matches the SendTransmission protocol and
    ``build_courier`` matches the BuildCourier protocol expected by AppServices.

    Attributes:
        sent: Transmissions received, in call order.
        configs: Provider settings passed to :meth:`build_courier`.
        raise_exception: When set, ``send`` records the call then raises it.

    Example:
        >>> from courier.adapters.sparkpost.transmission import StoredTemplateContent
        >>> spy = TransmissionSpy()
        >>> spy.send(Transmission(recipients=[], content=StoredTemplateContent(template_id="t")))
        'spy-1'
        >>> len(spy.sent)
        1
    """

    sent: list[Transmission] = field(default_factory=_empty_transmission_list)
    configs: list[SparkPostConfig] = field(default_factory=_empty_config_list)
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.configs.clear()
        self.raise_exception = None

    @property
    def last(self) -> Transmission:
        """Most recently captured transmission.

        Raises:
            IndexError: When nothing was sent yet.
        """
        return self.sent[-1]

    def send(self, transmission: Transmission) -> str:
        """Record ``transmission`` and return a sequential id ``spy-N``.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.sent.append(transmission)
        if self.raise_exception is not None:
            raise self.raise_exception
        return f"spy-{len(self.sent)}"

    def build_courier(self, config: SparkPostConfig) -> SparkPostCourier:
        """Return a courier that delivers into this spy."""
        self.configs.append(config)
        return SparkPostCourier(self)


def load_sparkpost_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> SparkPostConfig:
    """Parse provider config from dict using the real Pydantic model."""
    section = config_dict.get("sparkpost", {})
    return SparkPostConfig.model_validate(section if section else {})


__all__ = [
    "TransmissionSpy",
    "load_sparkpost_config_from_dict_in_memory",
]
