"""Vendor-neutral transactional email with a SparkPost implementation.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: emails, addresses, content variants, attachments, errors
- Application exports: the ``Courier`` port
- Adapter exports: the SparkPost courier, transport and settings
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.sparkpost import (
    SparkPostConfig,
    SparkPostCourier,
    SparkPostTransport,
    build_courier,
    load_sparkpost_config_from_dict,
)

# Application exports
from .application.ports import Courier

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    Address,
    Attachment,
    AttachmentHeaders,
    AttachmentReadError,
    BytesAttachment,
    ConfigurationError,
    Content,
    CourierError,
    DeliveryError,
    Email,
    FileAttachment,
    MalformedSenderError,
    SimpleContent,
    TemplatedContent,
    UnsupportedContentError,
    detect_content_type,
    determine_charset,
    format_address_list,
)

__all__ = [
    "Address",
    "Attachment",
    "AttachmentHeaders",
    "AttachmentReadError",
    "BytesAttachment",
    "ConfigurationError",
    "Content",
    "Courier",
    "CourierError",
    "DeliveryError",
    "Email",
    "FileAttachment",
    "MalformedSenderError",
    "SimpleContent",
    "SparkPostConfig",
    "SparkPostCourier",
    "SparkPostTransport",
    "TemplatedContent",
    "UnsupportedContentError",
    "build_courier",
    "detect_content_type",
    "determine_charset",
    "format_address_list",
    "get_config",
    "load_sparkpost_config_from_dict",
    "print_info",
]
