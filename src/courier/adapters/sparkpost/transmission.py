"""SparkPost transmission request models.

Frozen Pydantic models mirroring the JSON body accepted by the SparkPost
``/transmissions`` endpoint. Python attribute names follow this package's
conventions; :meth:`Transmission.to_payload` renders the vendor field names
(``from``, ``header_to``, attachment ``type``/``name``) and omits unset
optional fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RecipientAddress(BaseModel):
    """Delivery address plus the ``To:`` header shown to that recipient."""

    model_config = ConfigDict(frozen=True)

    email: str
    header_to: str = ""


class Recipient(BaseModel):
    """One envelope recipient of a transmission."""

    model_config = ConfigDict(frozen=True)

    address: RecipientAddress


class AttachmentPayload(BaseModel):
    """Inline attachment with base64-encoded data."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(serialization_alias="type")
    filename: str = Field(serialization_alias="name")
    data: str


def _empty_headers() -> dict[str, str]:
    return {}


def _empty_attachments() -> list[AttachmentPayload]:
    return []


class InlineContent(BaseModel):
    """Message body supplied directly in the request."""

    model_config = ConfigDict(frozen=True)

    from_: str = Field(serialization_alias="from")
    subject: str = ""
    html: str = ""
    text: str = ""
    reply_to: str = ""
    headers: dict[str, str] = Field(default_factory=_empty_headers)
    attachments: list[AttachmentPayload] = Field(default_factory=_empty_attachments)


class StoredTemplateContent(BaseModel):
    """Reference to a template stored in the SparkPost account."""

    model_config = ConfigDict(frozen=True)

    template_id: str


def _empty_substitutions() -> dict[str, str]:
    return {}


class Transmission(BaseModel):
    """Complete request for one outbound email.

    Example:
        >>> tx = Transmission(
        ...     recipients=[Recipient(address=RecipientAddress(email="jane@example.com"))],
        ...     content=StoredTemplateContent(template_id="welcome"),
        ...     substitution_data={"subject": "Hi"},
        ... )
        >>> tx.to_payload()
        {'recipients': [{'address': {'email': 'jane@example.com'}}], 'content': {'template_id': 'welcome'}, 'substitution_data': {'subject': 'Hi'}}
    """

    model_config = ConfigDict(frozen=True)

    recipients: list[Recipient]
    content: InlineContent | StoredTemplateContent
    substitution_data: dict[str, str] = Field(default_factory=_empty_substitutions)

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON-ready request body using SparkPost field names."""
        return self.model_dump(by_alias=True, exclude_defaults=True)


__all__ = [
    "AttachmentPayload",
    "InlineContent",
    "Recipient",
    "RecipientAddress",
    "StoredTemplateContent",
    "Transmission",
]
