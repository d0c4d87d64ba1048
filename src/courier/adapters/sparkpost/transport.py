"""SparkPost HTTP transport.

Posts :class:`~courier.adapters.sparkpost.transmission.Transmission` bodies
to the SparkPost REST API via httpx and turns the response into either a
transmission id or a :class:`~courier.domain.errors.DeliveryError`.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, cast

import httpx

from courier.domain.errors import ConfigurationError, DeliveryError

from .config import SparkPostConfig
from .transmission import Transmission

logger = logging.getLogger(__name__)


def _error_message(body: Any, status_code: int) -> str:
    """Join the provider's error entries into one readable message.

    Example:
        >>> _error_message({"errors": [{"message": "Invalid data", "description": "bad from"}]}, 422)
        'Invalid data: bad from'
        >>> _error_message(None, 503)
        'SparkPost request failed with HTTP 503'
    """
    errors: Any = body.get("errors") if isinstance(body, dict) else None
    parts: list[str] = []
    if isinstance(errors, list):
        for entry in cast(list[Any], errors):
            if not isinstance(entry, dict):
                continue
            entry_map = cast(dict[str, Any], entry)
            message = str(entry_map.get("message", "")).strip()
            description = str(entry_map.get("description", "")).strip()
            text = ": ".join(part for part in (message, description) if part)
            if text:
                parts.append(text)
    if parts:
        return "; ".join(parts)
    return f"SparkPost request failed with HTTP {status_code}"


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class SparkPostTransport:
    """Deliver transmissions to SparkPost over HTTPS.

    Args:
        config: Provider settings; ``api_key`` must be set.
        client: Optional pre-built httpx client. A client created here is
            closed by :meth:`close`; an injected one stays open.

    Raises:
        ConfigurationError: When no API key is configured.
    """

    def __init__(self, config: SparkPostConfig, client: httpx.Client | None = None) -> None:
        if config.api_key is None:
            raise ConfigurationError("No SparkPost API key configured (sparkpost.api_key is empty)")
        self.config = config
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=config.timeout)

    def __repr__(self) -> str:
        return f"SparkPostTransport(url={self.config.transmissions_url!r})"

    def send(self, transmission: Transmission) -> str:
        """Submit ``transmission`` and return the id SparkPost assigned.

        Raises:
            DeliveryError: On network failure, a non-2xx status or an
                ``errors`` array in the response body.
        """
        url = self.config.transmissions_url
        headers = {
            "Authorization": cast(str, self.config.api_key),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            response = self._client.post(url, json=transmission.to_payload(), headers=headers, timeout=self.config.timeout)
        except httpx.HTTPError as exc:
            logger.error("SparkPost request failed", extra={"url": url, "error": str(exc)})
            raise DeliveryError(f"SparkPost request failed: {exc}") from exc

        body = _decode(response)
        has_errors = isinstance(body, dict) and bool(cast(dict[str, Any], body).get("errors"))
        if response.is_success and not has_errors:
            transmission_id = self._transmission_id(body)
            if transmission_id is not None:
                return transmission_id

        message = _error_message(body, response.status_code)
        logger.error(
            "SparkPost rejected transmission",
            extra={"url": url, "status_code": response.status_code, "error": message},
        )
        raise DeliveryError(message, status_code=response.status_code)

    @staticmethod
    def _transmission_id(body: Any) -> str | None:
        if not isinstance(body, dict):
            return None
        results: Any = cast(dict[str, Any], body).get("results")
        if not isinstance(results, dict):
            return None
        transmission_id: Any = cast(dict[str, Any], results).get("id")
        if transmission_id is None or transmission_id == "":
            return None
        return str(transmission_id)

    def close(self) -> None:
        """Close the underlying client when this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> SparkPostTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["SparkPostTransport"]
