"""Vendor-neutral email value objects.

Contents:
    * :class:`Address` - mailbox with optional display name.
    * :class:`SimpleContent` - plain text plus HTML body.
    * :class:`TemplatedContent` - reference to a provider-hosted template.
    * :class:`Email` - one outbound message.
    * :func:`format_address_list` - comma-joined RFC 2822 rendering.

System Role:
    Pure domain layer. Nothing here knows about a provider's wire format;
    adapters translate these values into their own request shapes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .attachment import Attachment


@dataclass(frozen=True, slots=True)
class Address:
    """Email address with an optional display name.

    No syntax validation is performed; any string is accepted as ``email``.

    Attributes:
        email: Mailbox address, e.g. ``jane@example.com``.
        name: Display name. Empty when unset.
    """

    email: str
    name: str = ""

    def to_rfc2822(self) -> str:
        """Render the address in RFC 2822 form.

        Quote characters inside ``name`` are not escaped; callers must
        sanitize display names before building the address.

        Example:
            >>> Address("jane@example.com", "Jane Doe").to_rfc2822()
            '"Jane Doe" <jane@example.com>'
            >>> Address("jane@example.com").to_rfc2822()
            'jane@example.com'
        """
        if self.name:
            return f'"{self.name}" <{self.email}>'
        return self.email


@dataclass(frozen=True, slots=True)
class SimpleContent:
    """Plain text and HTML body sent as-is."""

    text: str = ""
    html: str = ""


def _empty_substitutions() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class TemplatedContent:
    """Provider-hosted template plus its merge variables.

    Attributes:
        template_id: Identifier of the template stored at the provider.
        substitution_data: Merge variables filling the template placeholders.
    """

    template_id: str
    substitution_data: Mapping[str, str] = field(default_factory=_empty_substitutions)


Content = SimpleContent | TemplatedContent
"""The closed set of body variants an :class:`Email` can carry."""


def _empty_addresses() -> list[Address]:
    return []


def _empty_headers() -> dict[str, str]:
    return {}


def _empty_attachments() -> list[Attachment]:
    return []


@dataclass(frozen=True, slots=True)
class Email:
    """One outbound email, independent of any provider.

    Attributes:
        from_address: Sender mailbox.
        subject: Subject line.
        content: Exactly one of :class:`SimpleContent` or :class:`TemplatedContent`.
        to: Primary recipients, in display order.
        cc: Carbon-copy recipients.
        bcc: Blind carbon-copy recipients.
        reply_to: Optional reply-to mailbox.
        headers: Extra message headers.
        attachments: Files attached to the message.

    Example:
        >>> email = Email(
        ...     from_address=Address("sender@example.com", "Sender"),
        ...     subject="Hi",
        ...     content=SimpleContent(text="Hello"),
        ...     to=[Address("jane@example.com")],
        ... )
        >>> email.to[0].to_rfc2822()
        'jane@example.com'
    """

    from_address: Address
    subject: str
    content: Content
    to: Sequence[Address] = field(default_factory=_empty_addresses)
    cc: Sequence[Address] = field(default_factory=_empty_addresses)
    bcc: Sequence[Address] = field(default_factory=_empty_addresses)
    reply_to: Address | None = None
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    attachments: Sequence[Attachment] = field(default_factory=_empty_attachments)


def format_address_list(addresses: Sequence[Address]) -> str:
    """Join the RFC 2822 forms of ``addresses`` with commas, keeping order.

    Example:
        >>> format_address_list([Address("a@x.io", "A"), Address("b@x.io")])
        '"A" <a@x.io>,b@x.io'
        >>> format_address_list([])
        ''
    """
    return ",".join(address.to_rfc2822() for address in addresses)


__all__ = [
    "Address",
    "Content",
    "Email",
    "SimpleContent",
    "TemplatedContent",
    "format_address_list",
]
