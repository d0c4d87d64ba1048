"""SparkPost courier - maps vendor-neutral emails onto SparkPost transmissions.

Contents:
    * :class:`SparkPostCourier` - :class:`~courier.application.ports.Courier`
      implementation delegating delivery to a transport.
    * :func:`build_recipients` - envelope recipients for To, Cc and Bcc.
    * :func:`build_attachments` - attachment payloads for inline content.
    * :func:`split_sender` - local part and domain of the sender address.

System Role:
    Adapter layer. Performs only local data transformation; the single
    network call happens inside the injected transport. Caller-supplied
    ``headers`` and ``substitution_data`` are copied, never modified.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import TracebackType

from courier.application.ports import SendTransmission
from courier.domain.attachment import Attachment
from courier.domain.email import Email, SimpleContent, TemplatedContent, format_address_list
from courier.domain.enums import ContentKind
from courier.domain.errors import MalformedSenderError, UnsupportedContentError

from .transmission import (
    AttachmentPayload,
    InlineContent,
    Recipient,
    RecipientAddress,
    StoredTemplateContent,
    Transmission,
)

logger = logging.getLogger(__name__)

CC_KEY = "CC"


def build_recipients(email: Email) -> list[Recipient]:
    """Return one recipient per To, Cc and Bcc address, in that order.

    Every recipient carries the same ``header_to`` built from the To
    addresses only, which controls what the ``To:`` header displays.

    Example:
        >>> from courier.domain.email import Address
        >>> email = Email(
        ...     from_address=Address("s@example.com"),
        ...     subject="",
        ...     content=SimpleContent(),
        ...     to=[Address("t@example.com", "T")],
        ...     bcc=[Address("b@example.com")],
        ... )
        >>> [(r.address.email, r.address.header_to) for r in build_recipients(email)]
        [('t@example.com', '"T" <t@example.com>'), ('b@example.com', '"T" <t@example.com>')]
    """
    header_to = format_address_list(email.to)
    return [
        Recipient(address=RecipientAddress(email=address.email, header_to=header_to))
        for address in (*email.to, *email.cc, *email.bcc)
    ]


def build_attachments(attachments: Sequence[Attachment]) -> list[AttachmentPayload]:
    """Map attachments to payloads, failing on the first unreadable one.

    Raises:
        AttachmentReadError: When an attachment's content cannot be read.
    """
    return [
        AttachmentPayload(
            mime_type=attachment.content_type(),
            filename=attachment.name(),
            data=attachment.base64_content(),
        )
        for attachment in attachments
    ]


def split_sender(address: str) -> tuple[str, str]:
    """Split ``address`` at the first ``@`` into local part and domain.

    Raises:
        MalformedSenderError: When ``address`` contains no ``@``.

    Example:
        >>> split_sender("news@mail.example.com")
        ('news', 'mail.example.com')
        >>> split_sender("a@b@c")
        ('a', 'b@c')
    """
    local, sep, domain = address.partition("@")
    if not sep:
        raise MalformedSenderError(f"Malformed sender address {address!r}: missing '@'")
    return local, domain


class SparkPostCourier:
    """Courier sending emails through SparkPost.

    Args:
        transport: Delivers the built transmission and returns its id.

    Example:
        >>> from courier.adapters.memory import TransmissionSpy
        >>> from courier.domain.email import Address
        >>> spy = TransmissionSpy()
        >>> courier = SparkPostCourier(spy)
        >>> courier.send(Email(
        ...     from_address=Address("s@example.com"),
        ...     subject="Hi",
        ...     content=SimpleContent(text="Hello"),
        ...     to=[Address("t@example.com")],
        ... ))
        'spy-1'
    """

    def __init__(self, transport: SendTransmission) -> None:
        self.transport = transport

    def __repr__(self) -> str:
        return f"SparkPostCourier(transport={self.transport!r})"

    def close(self) -> None:
        """Release the transport when it holds resources (e.g. an HTTP client)."""
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> SparkPostCourier:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def send(self, email: Email) -> str:
        """Send ``email`` and return the SparkPost transmission id.

        Raises:
            UnsupportedContentError: Content is neither simple nor templated.
            MalformedSenderError: Templated send with a sender lacking ``@``.
            AttachmentReadError: An attachment could not be read.
            DeliveryError: The transport reported a failure.
        """
        content = email.content
        if isinstance(content, SimpleContent):
            transmission = self._simple_transmission(email, content)
            kind = ContentKind.SIMPLE
        elif isinstance(content, TemplatedContent):
            transmission = self._templated_transmission(email, content)
            kind = ContentKind.TEMPLATED
        else:
            raise UnsupportedContentError(f"Unsupported content type {type(content).__name__}")

        logger.info(
            "Sending transmission",
            extra={
                "content_kind": kind.value,
                "recipient_count": len(transmission.recipients),
                "attachment_count": len(email.attachments) if kind is ContentKind.SIMPLE else 0,
            },
        )
        transmission_id = self.transport.send(transmission)
        logger.info("Transmission accepted", extra={"transmission_id": transmission_id})
        return transmission_id

    def _simple_transmission(self, email: Email, content: SimpleContent) -> Transmission:
        headers = dict(email.headers)
        if email.cc:
            headers[CC_KEY] = format_address_list(email.cc)

        return Transmission(
            recipients=build_recipients(email),
            content=InlineContent(
                from_=email.from_address.to_rfc2822(),
                subject=email.subject,
                html=content.html,
                text=content.text,
                reply_to=email.reply_to.to_rfc2822() if email.reply_to is not None else "",
                headers=headers,
                attachments=build_attachments(email.attachments),
            ),
        )

    def _templated_transmission(self, email: Email, content: TemplatedContent) -> Transmission:
        local, domain = split_sender(email.from_address.email)

        substitution_data = dict(content.substitution_data)
        if email.cc:
            substitution_data[CC_KEY] = format_address_list(email.cc)
        if email.reply_to is not None:
            substitution_data["replyTo"] = email.reply_to.to_rfc2822()
        if email.from_address.name:
            substitution_data["fromName"] = email.from_address.name
        substitution_data["subject"] = email.subject
        substitution_data["fromEmail"] = local
        substitution_data["fromDomain"] = domain

        if email.attachments:
            # Stored templates accept no inline attachments.
            logger.warning(
                "Attachments are not sent with stored templates",
                extra={"template_id": content.template_id, "attachment_count": len(email.attachments)},
            )

        return Transmission(
            recipients=build_recipients(email),
            content=StoredTemplateContent(template_id=content.template_id),
            substitution_data=substitution_data,
        )


__all__ = [
    "CC_KEY",
    "SparkPostCourier",
    "build_attachments",
    "build_recipients",
    "split_sender",
]
