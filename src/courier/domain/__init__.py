"""Domain layer - vendor-neutral email model with no framework dependencies.

Contains the value objects, attachment capability, content sniffing, and
error taxonomy shared by every provider adapter.

Contents:
    * :mod:`.email` - Address, Email, and the two content variants
    * :mod:`.attachment` - Attachment protocol and implementations
    * :mod:`.sniffing` - Content-type and charset detection
    * :mod:`.enums` - Domain enumerations (OutputFormat, ContentKind)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .attachment import Attachment, AttachmentHeaders, BytesAttachment, FileAttachment
from .email import Address, Content, Email, SimpleContent, TemplatedContent, format_address_list
from .enums import ContentKind, OutputFormat
from .errors import (
    AttachmentReadError,
    ConfigurationError,
    CourierError,
    DeliveryError,
    MalformedSenderError,
    UnsupportedContentError,
)
from .sniffing import detect_content_type, determine_charset

__all__ = [
    # Email model
    "Address",
    "Content",
    "Email",
    "SimpleContent",
    "TemplatedContent",
    "format_address_list",
    # Attachments
    "Attachment",
    "AttachmentHeaders",
    "BytesAttachment",
    "FileAttachment",
    # Sniffing
    "detect_content_type",
    "determine_charset",
    # Enums
    "ContentKind",
    "OutputFormat",
    # Errors
    "AttachmentReadError",
    "ConfigurationError",
    "CourierError",
    "DeliveryError",
    "MalformedSenderError",
    "UnsupportedContentError",
]
