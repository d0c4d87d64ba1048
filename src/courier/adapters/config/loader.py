"""Layered configuration loading for the courier CLI.

Precedence, lowest first: packaged ``defaultconfig.toml``, app, host and user
files, ``.env`` and finally ``COURIER___SECTION__KEY`` environment variables.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from courier import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Config loader that also exposes ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names unsafe for use as a directory component.

    Raises:
        ValueError: When the name is empty, too long, contains path
            separators or is otherwise rejected by lib_layered_config.

    Examples:
        >>> validate_profile("production")

        >>> validate_profile("../secrets")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: ...
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Path of the ``defaultconfig.toml`` shipped inside the package.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the merged configuration, cached per ``(profile, start_dir)``.

    Args:
        profile: Optional profile; inserts ``profile/<name>/`` into every
            search path so staging and production keys stay apart.
        start_dir: Directory where ``.env`` discovery starts; defaults to
            the working directory.

    Raises:
        ValueError: When ``profile`` is not a valid profile name.

    Example:
        >>> config = get_config()
        >>> config.get("sparkpost", default={}).get("api_version")
        1
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    _read_layers.cache_clear()


_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
