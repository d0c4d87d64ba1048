"""Static package metadata surfaced by ``courier info``.

``version`` is kept in sync with ``pyproject.toml``; the ``LAYEREDCONF_*``
identifiers decide where lib_layered_config looks for configuration files.
"""

from __future__ import annotations

name = "courier"
title = "Send transactional email through SparkPost"
version = "1.0.0"
homepage = "https://github.com/courier-mail/courier"
author = "courier maintainers"
author_email = "maintainers@courier-mail.dev"
shell_command = "courier"

#: Vendor directory on macOS and Windows (e.g. ``%APPDATA%/<vendor>/<app>``).
LAYEREDCONF_VENDOR = "courier-mail"
#: Application directory on macOS and Windows.
LAYEREDCONF_APP = "Courier"
#: Directory name on Linux (``~/.config/<slug>``) and environment variable prefix.
LAYEREDCONF_SLUG = "courier"


def print_info() -> None:
    """Print the metadata above as an aligned ``key = value`` block."""
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
        ("config_vendor", LAYEREDCONF_VENDOR),
        ("config_app", LAYEREDCONF_APP),
        ("config_slug", LAYEREDCONF_SLUG),
    )
    width = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(width)} = {value}" for label, value in fields)
    print("\n".join(lines))
