"""SparkPost configuration model and loader.

Provides the SparkPostConfig Pydantic model for validated, immutable provider
settings and the loader function to create it from configuration dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_BASE_URL = "https://api.sparkpost.com"


class SparkPostConfig(BaseModel):
    """Validated, immutable SparkPost settings.

    Example:
        >>> config = SparkPostConfig(api_key="secret", from_address="noreply@example.com")
        >>> config.transmissions_url
        'https://api.sparkpost.com/api/v1/transmissions'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    api_version: int = 1
    timeout: float = 30.0
    from_address: str | None = None
    from_name: str | None = None
    recipients: list[str] = Field(default_factory=list)
    template_id: str | None = None

    @field_validator("recipients", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce single strings to single-element lists.

        Handles environment variables and .env files that provide single strings
        instead of TOML arrays. Empty strings become empty lists.

        Examples:
            >>> SparkPostConfig._coerce_string_to_list("ops@example.com")
            ['ops@example.com']
            >>> SparkPostConfig._coerce_string_to_list("")
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, list):
            return cast(list[str], v)
        return []

    @field_validator("api_key", "from_address", "from_name", "template_id", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files as "not configured" rather than
        explicit empty values, so an unset API key is never sent to the provider.
        Numbers (e.g. a numeric template id passed via ``--set``) become strings.

        Examples:
            >>> SparkPostConfig._coerce_empty_string_to_none("  ") is None
            True
            >>> SparkPostConfig._coerce_empty_string_to_none(42)
            '42'
        """
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def _validate_config(self) -> SparkPostConfig:
        """Validate configuration values.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> SparkPostConfig(timeout=-5.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.api_version < 1:
            raise ValueError(f"api_version must be at least 1, got {self.api_version}")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {self.base_url!r}")
        return self

    @property
    def transmissions_url(self) -> str:
        """Absolute URL of the transmissions endpoint."""
        return f"{self.base_url}/api/v{self.api_version}/transmissions"

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = SparkPostConfig(api_key="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"SparkPostConfig({', '.join(fields)})"


def load_sparkpost_config_from_dict(config_dict: Mapping[str, Any]) -> SparkPostConfig:
    """Load SparkPostConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    SparkPostConfig Pydantic model. Single-parse validation at the boundary.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'sparkpost' section.

    Returns:
        Configured provider settings with defaults for missing values.

    Example:
        >>> config = load_sparkpost_config_from_dict(
        ...     {"sparkpost": {"api_key": "k", "base_url": "https://api.eu.sparkpost.com/"}}
        ... )
        >>> config.base_url
        'https://api.eu.sparkpost.com'
        >>> load_sparkpost_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("sparkpost", {})

    # Non-dict section (e.g. "sparkpost": "invalid") fails validation below
    if not isinstance(section, Mapping):
        return SparkPostConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return SparkPostConfig.model_validate(raw if raw else {})


__all__ = [
    "DEFAULT_BASE_URL",
    "SparkPostConfig",
    "load_sparkpost_config_from_dict",
]
