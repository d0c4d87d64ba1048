"""Shared pieces of the ``send-email`` and ``send-template`` commands.

Covers option decorators, ``[sparkpost]`` loading with CLI overrides,
address parsing and the mapping from courier errors to exit codes.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable, Sequence
from email.utils import parseaddr
from typing import TYPE_CHECKING, Any, NoReturn, cast

import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError

from courier import __init__conf__
from courier.adapters.sparkpost.config import SparkPostConfig
from courier.application.ports import LoadSparkPostConfigFromDict
from courier.domain.email import Address, Email
from courier.domain.errors import (
    AttachmentReadError,
    ConfigurationError,
    DeliveryError,
    MalformedSenderError,
    UnsupportedContentError,
)

from ...exit_codes import ExitCode

if TYPE_CHECKING:
    from courier.composition import AppServices

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop options the user did not pass (``None`` or ``()``); tuples become lists.

    Example:
        >>> filter_sentinels(timeout=None, recipients=("a@example.com",), base_url="https://x")
        {'recipients': ['a@example.com'], 'base_url': 'https://x'}
    """
    result: dict[str, Any] = {}
    for key, value in kwargs.items():
        if value is None or value == ():
            continue
        result[key] = list(cast(tuple[Any, ...], value)) if isinstance(value, tuple) else value
    return result


def apply_validated_overrides(base_config: SparkPostConfig, overrides: dict[str, Any]) -> SparkPostConfig:
    """Merge ``overrides`` into ``base_config`` and validate the result again.

    Raises:
        ValidationError: When an override is invalid.
    """
    if not overrides:
        return base_config
    return SparkPostConfig.model_validate({**base_config.model_dump(), **overrides})


def addressing_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the envelope options both send commands share."""
    options = [
        click.option(
            "--to",
            "to",
            multiple=True,
            help="Recipient, 'addr' or 'Name <addr>' (repeatable; defaults to sparkpost.recipients)",
        ),
        click.option("--cc", "cc", multiple=True, help="Carbon-copy recipient (repeatable)"),
        click.option("--bcc", "bcc", multiple=True, help="Blind carbon-copy recipient (repeatable)"),
        click.option(
            "--from", "from_address", default=None, help="Sender address (defaults to sparkpost.from_address)"
        ),
        click.option("--from-name", default=None, help="Sender display name (defaults to sparkpost.from_name)"),
        click.option("--reply-to", default=None, help="Reply-To address"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def sparkpost_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add per-invocation overrides of ``[sparkpost]`` connection settings."""
    options = [
        click.option("--base-url", default=None, help="Override sparkpost.base_url (e.g. the EU endpoint)"),
        click.option("--api-version", type=int, default=None, help="Override sparkpost.api_version"),
        click.option("--timeout", type=float, default=None, help="Override request timeout in seconds"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def load_sparkpost_config(
    config: Config,
    loader: LoadSparkPostConfigFromDict,
    overrides: dict[str, Any],
) -> SparkPostConfig:
    """Return validated provider settings or exit with ``CONFIG_ERROR``.

    Raises:
        SystemExit: When the section is invalid (78), an override is invalid
            (22) or no API key is configured (78).
    """
    try:
        sparkpost_config = loader(config.as_dict())
    except ValidationError as exc:
        _fail(exc, "Invalid sparkpost configuration", "Invalid [sparkpost] configuration", ExitCode.CONFIG_ERROR)

    try:
        sparkpost_config = apply_validated_overrides(sparkpost_config, overrides)
    except ValidationError as exc:
        _fail(exc, "Invalid sparkpost override", "Invalid option value", ExitCode.INVALID_ARGUMENT)

    if sparkpost_config.api_key is None:
        logger.error("No SparkPost API key configured")
        click.echo("\nError: No SparkPost API key configured. Set sparkpost.api_key in your config file", err=True)
        click.echo(f"or export {__init__conf__.LAYEREDCONF_SLUG.upper()}___SPARKPOST__API_KEY.", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR)

    return sparkpost_config


def parse_address(raw: str, *, what: str = "address") -> Address:
    """Parse ``addr`` or ``Name <addr>`` into an :class:`Address`.

    Raises:
        ValueError: When no address containing ``@`` can be found.

    Examples:
        >>> parse_address("Jane Doe <jane@example.com>")
        Address(email='jane@example.com', name='Jane Doe')
        >>> parse_address("ops@example.com")
        Address(email='ops@example.com', name='')
    """
    name, email = parseaddr(raw)
    if "@" not in email:
        raise ValueError(f"Invalid {what} {raw!r}")
    return Address(email=email, name=name)


def parse_addresses(raw_values: Sequence[str], *, what: str = "recipient") -> list[Address]:
    """Parse each of ``raw_values`` with :func:`parse_address`."""
    return [parse_address(raw, what=what) for raw in raw_values]


def resolve_sender(sparkpost_config: SparkPostConfig, from_address: str | None, from_name: str | None) -> Address:
    """Build the sender from CLI options, falling back to configuration.

    Raises:
        ValueError: When neither option nor configuration provides an address.
    """
    raw = from_address if from_address is not None else sparkpost_config.from_address
    if raw is None:
        raise ValueError("No from_address configured and no --from provided")
    sender = parse_address(raw, what="sender")
    name = from_name if from_name is not None else sparkpost_config.from_name
    if name:
        return Address(email=sender.email, name=name)
    return sender


def resolve_to(sparkpost_config: SparkPostConfig, to: Sequence[str]) -> list[Address]:
    """Return ``--to`` recipients, or ``sparkpost.recipients`` when none given."""
    return parse_addresses(to if to else sparkpost_config.recipients)


def deliver(services: AppServices, sparkpost_config: SparkPostConfig, email: Email) -> str:
    """Send ``email`` with a courier built for this invocation and close it afterwards.

    Raises:
        ValueError: When the email has no recipient at all.
    """
    if not (email.to or email.cc or email.bcc):
        raise ValueError("No recipients configured and no --to/--cc/--bcc provided")
    with services.build_courier(sparkpost_config) as courier:
        return courier.send(email)


def execute_send(*, operation: Callable[[], str], kind: str) -> None:
    """Run ``operation`` and print the transmission id it returns.

    Exceptions are matched most specific first:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. UnsupportedContentError, MalformedSenderError, ValueError -> INVALID_ARGUMENT (22)
    3. FileNotFoundError -> FILE_NOT_FOUND (2)
    4. AttachmentReadError, other OSError -> IO_ERROR (74)
    5. DeliveryError -> DELIVERY_FAILURE (69)
    6. anything else -> GENERAL_ERROR (1), re-raised when ``DEVELOPMENT_MODE`` is set

    Raises:
        SystemExit: On any failure.
    """
    try:
        transmission_id = operation()
    except ConfigurationError as exc:
        _fail(exc, f"{kind} configuration error", "Configuration error", ExitCode.CONFIG_ERROR)
    except (UnsupportedContentError, MalformedSenderError, ValueError) as exc:
        _fail(exc, f"Invalid {kind.lower()} parameters", "Invalid parameters", ExitCode.INVALID_ARGUMENT)
    except FileNotFoundError as exc:
        _fail(exc, "Attachment file not found", "Attachment file not found", ExitCode.FILE_NOT_FOUND)
    except (AttachmentReadError, OSError) as exc:
        _fail(exc, "Attachment could not be read", "Attachment could not be read", ExitCode.IO_ERROR)
    except DeliveryError as exc:
        logger.error(
            "SparkPost delivery failed",
            extra={"error": str(exc), "status_code": exc.status_code},
        )
        click.echo(f"\nError: Failed to send {kind.lower()} - {exc}", err=True)
        raise SystemExit(ExitCode.DELIVERY_FAILURE) from exc
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(exc, f"Unexpected error sending {kind.lower()}", "Unexpected error", ExitCode.GENERAL_ERROR, True)

    logger.info("%s sent via CLI", kind, extra={"transmission_id": transmission_id})
    click.echo(transmission_id)


def _fail(
    exc: Exception,
    log_message: str,
    user_message: str,
    exit_code: ExitCode,
    log_traceback: bool = False,
) -> NoReturn:
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code) from exc


__all__ = [
    "addressing_options",
    "apply_validated_overrides",
    "deliver",
    "execute_send",
    "filter_sentinels",
    "load_sparkpost_config",
    "parse_address",
    "parse_addresses",
    "resolve_sender",
    "resolve_to",
    "sparkpost_options",
]
