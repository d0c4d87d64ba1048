"""Attachment capability and its file-backed and in-memory implementations.

Contents:
    * :class:`Attachment` - structural protocol every attachment satisfies.
    * :class:`AttachmentHeaders` - explicit overrides for derived metadata.
    * :class:`FileAttachment` - attachment read lazily from a caller-owned handle.
    * :class:`BytesAttachment` - attachment built from bytes already in memory.

System Role:
    Domain layer. Adapters only rely on the :class:`Attachment` protocol, so
    callers may supply their own implementations.
"""

from __future__ import annotations

import base64
import os
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import IO, Protocol, runtime_checkable

from .errors import AttachmentReadError
from .sniffing import detect_content_type, determine_charset


@runtime_checkable
class Attachment(Protocol):
    """Something that can be attached to an email."""

    def name(self) -> str:
        """Return the file name presented to the recipient."""
        ...

    def content(self) -> bytes:
        """Return the raw bytes of the attachment.

        Raises:
            AttachmentReadError: When the bytes cannot be read.
        """
        ...

    def base64_content(self) -> str:
        """Return the content encoded as standard base64 text."""
        ...

    def content_type(self) -> str:
        """Return the MIME type, for example ``image/jpeg``."""
        ...

    def charset(self) -> str:
        """Return the character set, for example ``utf-8``."""
        ...

    def content_id(self) -> str:
        """Return the Content-ID used to embed the file inline, or ``""``."""
        ...


@dataclass(frozen=True, slots=True)
class AttachmentHeaders:
    """Explicit attachment metadata.

    Any non-empty field replaces the value an attachment would otherwise
    derive from its file name or content.
    """

    name: str = ""
    content_type: str = ""
    charset: str = ""
    content_id: str = ""


class _DerivedMetadata(ABC):
    """Accessors shared by attachments that derive metadata from their bytes."""

    headers: AttachmentHeaders

    @abstractmethod
    def content(self) -> bytes: ...

    def base64_content(self) -> str:
        return base64.b64encode(self.content()).decode("ascii")

    def content_type(self) -> str:
        if self.headers.content_type:
            return self.headers.content_type
        return detect_content_type(self.content())

    def charset(self) -> str:
        if self.headers.charset:
            return self.headers.charset
        return determine_charset(self.content(), self.content_type())

    def content_id(self) -> str:
        return self.headers.content_id


class FileAttachment(_DerivedMetadata):
    """Attachment backed by an open binary file handle.

    The handle stays owned by the caller and is never closed here. Its
    bytes are read on first use and cached, so every accessor returns the
    same result on repeated calls. The first read is serialized, making the
    attachment safe to share between threads.

    Args:
        file: Readable binary handle. ``file.name`` provides the default name.
        headers: Optional metadata overrides.

    Example:
        >>> import io
        >>> handle = io.BytesIO(b"Attachment Test")
        >>> handle.name = "/tmp/report.txt"
        >>> attachment = FileAttachment(handle)
        >>> attachment.name()
        'report.txt'
        >>> attachment.base64_content()
        'QXR0YWNobWVudCBUZXN0'
    """

    def __init__(self, file: IO[bytes], headers: AttachmentHeaders | None = None) -> None:
        self.file = file
        self.headers = headers if headers is not None else AttachmentHeaders()
        self._content: bytes | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"FileAttachment(file={getattr(self.file, 'name', self.file)!r}, headers={self.headers!r})"

    def name(self) -> str:
        if self.headers.name:
            return self.headers.name
        return os.path.basename(str(getattr(self.file, "name", "")))

    def content(self) -> bytes:
        if self._content is not None:
            return self._content
        with self._lock:
            if self._content is None:
                self._content = self._read()
        return self._content

    def _read(self) -> bytes:
        read = getattr(self.file, "read", None)
        if not callable(read):
            raise AttachmentReadError(f"Attachment {self.name()!r} is not a readable file handle")
        try:
            data = read()
        except (OSError, ValueError) as exc:
            # ValueError: read from a closed file.
            raise AttachmentReadError(f"Cannot read attachment {self.name()!r}: {exc}") from exc
        if isinstance(data, str):
            raise AttachmentReadError(f"Attachment {self.name()!r} was opened in text mode; open it with 'rb'")
        return bytes(data)


@dataclass(frozen=True)
class BytesAttachment(_DerivedMetadata):
    """Attachment whose bytes are already in memory.

    Example:
        >>> attachment = BytesAttachment(b"<p>hi</p>", "note.html")
        >>> attachment.content_type()
        'text/html; charset=utf-8'
        >>> attachment.charset()
        'utf-8'
    """

    data: bytes
    filename: str
    headers: AttachmentHeaders = field(default_factory=AttachmentHeaders)

    def name(self) -> str:
        return self.headers.name or self.filename

    def content(self) -> bytes:
        return self.data


__all__ = [
    "Attachment",
    "AttachmentHeaders",
    "BytesAttachment",
    "FileAttachment",
]
