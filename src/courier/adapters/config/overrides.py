"""``KEY=VALUE`` parsing shared by ``--set`` overrides and send options.

Contents:
    * :func:`split_assignment` - split one ``KEY=VALUE`` string.
    * :func:`parse_assignments` - collect repeated ``KEY=VALUE`` options into a dict.
    * :func:`parse_override` / :func:`apply_overrides` - ``--set SECTION.KEY=VALUE``
      handling on top of :meth:`lib_layered_config.Config.with_overrides`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Values an override may carry after JSON coercion."""


def split_assignment(raw: str, *, what: str = "assignment") -> tuple[str, str]:
    """Split ``raw`` at its first ``=`` into a stripped key and the raw value.

    Raises:
        ValueError: When ``=`` is missing or the key is empty.

    Examples:
        >>> split_assignment("X-Campaign=spring=2024")
        ('X-Campaign', 'spring=2024')
        >>> split_assignment("name=")
        ('name', '')
        >>> split_assignment("=value", what="header")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: Invalid header '=value': key is empty
    """
    key, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid {what} {raw!r}: expected KEY=VALUE")
    key = key.strip()
    if not key:
        raise ValueError(f"Invalid {what} {raw!r}: key is empty")
    return key, value


def parse_assignments(raw_values: Iterable[str], *, what: str = "assignment") -> dict[str, str]:
    """Collect ``KEY=VALUE`` strings into a dict; later keys win.

    Example:
        >>> parse_assignments(["a=1", "b=2", "a=3"])
        {'a': '3', 'b': '2'}
    """
    result: dict[str, str] = {}
    for raw in raw_values:
        key, value = split_assignment(raw, what=what)
        result[key] = value
    return result


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` value addressed by section and nested key path."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Raises:
        ValueError: When ``=`` or the section dot is missing, or a path
            component is empty.

    Examples:
        >>> override = parse_override("sparkpost.timeout=10")
        >>> override.section, override.key_path, override.value
        ('sparkpost', ('timeout',), 10)
        >>> parse_override("lib_log_rich.console_level=DEBUG").value
        'DEBUG'
    """
    path, value = split_assignment(raw, what="override")
    section, dot, rest = path.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must look like SECTION.KEY")
    key_path = tuple(rest.split("."))
    if not section or not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: empty section or key component")
    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value))


def coerce_value(raw: str) -> CoercedValue:
    """Interpret ``raw`` as JSON when possible, else keep the string.

    Examples:
        >>> coerce_value("false")
        False
        >>> coerce_value("2.5")
        2.5
        >>> coerce_value('["ops@example.com"]')
        ['ops@example.com']
        >>> coerce_value("https://api.eu.sparkpost.com")
        'https://api.eu.sparkpost.com'
        >>> coerce_value("")
        ''
    """
    if not raw:
        return raw
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def _merge_into(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise TypeError(f"Override {part!r} conflicts with a scalar value set earlier")
        node = cast("dict[str, object]", child)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` value deep-merged in.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> cfg = Config({"sparkpost": {"timeout": 30.0}}, {})
        >>> apply_overrides(cfg, ("sparkpost.timeout=5",))["sparkpost"]["timeout"]
        5
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    merged: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _merge_into(merged, parse_override(raw))
    return config.with_overrides(merged)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_assignments",
    "parse_override",
    "split_assignment",
]
