"""``send-email`` command: inline text/HTML email with optional attachments."""

from __future__ import annotations

import contextlib

import lib_log_rich.runtime
import rich_click as click

from courier.adapters.config.overrides import parse_assignments
from courier.domain.attachment import FileAttachment
from courier.domain.email import Email, SimpleContent

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    addressing_options,
    deliver,
    execute_send,
    filter_sentinels,
    load_sparkpost_config,
    parse_address,
    parse_addresses,
    resolve_sender,
    resolve_to,
    sparkpost_options,
)


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@addressing_options
@click.option("--subject", required=True, help="Subject line")
@click.option("--text", default="", help="Plain-text body")
@click.option("--html", default="", help="HTML body")
@click.option("--header", "headers", multiple=True, metavar="NAME=VALUE", help="Extra MIME header (repeatable)")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(dir_okay=False, path_type=str),
    help="File to attach (repeatable)",
)
@sparkpost_options
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str | None,
    from_name: str | None,
    reply_to: str | None,
    subject: str,
    text: str,
    html: str,
    headers: tuple[str, ...],
    attachments: tuple[str, ...],
    base_url: str | None,
    api_version: int | None,
    timeout: float | None,
) -> None:
    """Send an email with inline content through SparkPost.

    Prints the transmission id on success.
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-email", "subject": subject, "attachment_count": len(attachments)}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        sparkpost_config = load_sparkpost_config(
            cli_ctx.config,
            cli_ctx.services.load_sparkpost_config_from_dict,
            filter_sentinels(base_url=base_url, api_version=api_version, timeout=timeout),
        )

        def _send() -> str:
            with contextlib.ExitStack() as stack:
                handles = [stack.enter_context(open(path, "rb")) for path in attachments]
                email = Email(
                    from_address=resolve_sender(sparkpost_config, from_address, from_name),
                    subject=subject,
                    content=SimpleContent(text=text, html=html),
                    to=resolve_to(sparkpost_config, to),
                    cc=parse_addresses(cc),
                    bcc=parse_addresses(bcc),
                    reply_to=parse_address(reply_to, what="reply-to address") if reply_to else None,
                    headers=parse_assignments(headers, what="header"),
                    attachments=[FileAttachment(handle) for handle in handles],
                )
                return deliver(cli_ctx.services, sparkpost_config, email)

        execute_send(operation=_send, kind="Email")


__all__ = ["cli_send_email"]
