"""``send-template`` command: render a SparkPost stored template."""

from __future__ import annotations

import lib_log_rich.runtime
import rich_click as click

from courier.adapters.config.overrides import parse_assignments
from courier.domain.email import Email, TemplatedContent

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


@click.command("send-template", context_settings=CLICK_CONTEXT_SETTINGS)
@addressing_options
@click.option("--template-id", default=None, help="Stored template id (defaults to sparkpost.template_id)")
@click.option("--subject", default="", help="Subject passed to the template as {{subject}}")
@click.option(
    "--data",
    "substitutions",
    multiple=True,
    metavar="KEY=VALUE",
    help="Template substitution value (repeatable)",
)
@sparkpost_options
@click.pass_context
def cli_send_template(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str | None,
    from_name: str | None,
    reply_to: str | None,
    template_id: str | None,
    subject: str,
    substitutions: tuple[str, ...],
    base_url: str | None,
    api_version: int | None,
    timeout: float | None,
) -> None:
    """Send an email rendered from a SparkPost stored template.

    Sender, subject, Cc and Reply-To reach the template as the substitution
    keys fromEmail, fromDomain, fromName, subject, CC and replyTo.
    Prints the transmission id on success.
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-template", "template_id": template_id}

    with lib_log_rich.runtime.bind(job_id="cli-send-template", extra=extra):
        sparkpost_config = load_sparkpost_config(
            cli_ctx.config,
            cli_ctx.services.load_sparkpost_config_from_dict,
            filter_sentinels(base_url=base_url, api_version=api_version, timeout=timeout),
        )

        def _send() -> str:
            resolved_template = template_id or sparkpost_config.template_id
            if not resolved_template:
                raise ValueError("No template_id configured and no --template-id provided")
            email = Email(
                from_address=resolve_sender(sparkpost_config, from_address, from_name),
                subject=subject,
                content=TemplatedContent(
                    template_id=resolved_template,
                    substitution_data=parse_assignments(substitutions, what="substitution"),
                ),
                to=resolve_to(sparkpost_config, to),
                cc=parse_addresses(cc),
                bcc=parse_addresses(bcc),
                reply_to=parse_address(reply_to, what="reply-to address") if reply_to else None,
            )
            return deliver(cli_ctx.services, sparkpost_config, email)

        execute_send(operation=_send, kind="Template email")


__all__ = ["cli_send_template"]
