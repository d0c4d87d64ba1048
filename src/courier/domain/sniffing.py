"""Content-type sniffing and charset detection for attachment payloads.

Implements the WHATWG MIME sniffing rules used for HTTP content-type
detection: only the first 512 bytes are examined, magic numbers are matched
in a fixed order, and anything that looks like text falls back to
``text/plain; charset=utf-8``.

Charset detection follows the HTML encoding-sniffing order: byte-order mark,
declared ``charset`` parameter, in-document ``<meta>`` declaration, UTF-8
validity, and finally ``windows-1252``.

Contents:
    * :func:`detect_content_type` - classify a payload by its leading bytes.
    * :func:`determine_charset` - pick the most likely character encoding.
"""

from __future__ import annotations

import codecs
import re
from collections.abc import Callable
from typing import Final

SNIFF_LENGTH: Final[int] = 512
"""Number of leading bytes examined by :func:`detect_content_type`."""

CHARSET_SNIFF_LENGTH: Final[int] = 1024
"""Number of leading bytes examined by :func:`determine_charset`."""

DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"
TEXT_CONTENT_TYPE: Final[str] = "text/plain; charset=utf-8"
DEFAULT_CHARSET: Final[str] = "windows-1252"

_WHITESPACE: Final[frozenset[int]] = frozenset(b"\t\n\x0c\r ")

_HTML_TAGS: Final[tuple[bytes, ...]] = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

Matcher = Callable[[bytes, int], str | None]


def _html(tag: bytes) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(tag) + 1:
            return None
        for expected, actual in zip(tag, data):
            if ord("A") <= expected <= ord("Z"):
                actual &= 0xDF
            if expected != actual:
                return None
        if data[len(tag)] not in b" >":
            return None
        return "text/html; charset=utf-8"

    return match


def _masked(pattern: bytes, mask: bytes, content_type: str, *, skip_whitespace: bool = False) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> str | None:
        if skip_whitespace:
            data = data[first_non_ws:]
        if len(data) < len(pattern):
            return None
        for expected, bits, actual in zip(pattern, mask, data):
            if actual & bits != expected:
                return None
        return content_type

    return match


def _exact(prefix: bytes, content_type: str) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> str | None:
        return content_type if data.startswith(prefix) else None

    return match


def _mp4(data: bytes, first_non_ws: int) -> str | None:
    if len(data) < 12:
        return None
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return None
    if data[4:8] != b"ftyp":
        return None
    for start in range(8, box_size, 4):
        if start == 12:
            # Skips the minor version number.
            continue
        if data[start : start + 3] == b"mp4":
            return "video/mp4"
    return None


def _text(data: bytes, first_non_ws: int) -> str | None:
    for byte in data[first_non_ws:]:
        if byte <= 0x08 or byte == 0x0B or 0x0E <= byte <= 0x1A or 0x1C <= byte <= 0x1F:
            return None
    return TEXT_CONTENT_TYPE


_SIGNATURES: Final[tuple[Matcher, ...]] = (
    *(_html(tag) for tag in _HTML_TAGS),
    _masked(b"<?xml", b"\xff\xff\xff\xff\xff", "text/xml; charset=utf-8", skip_whitespace=True),
    _exact(b"%PDF-", "application/pdf"),
    _exact(b"%!PS-Adobe-", "application/postscript"),
    _masked(b"\xfe\xff\x00\x00", b"\xff\xff\x00\x00", "text/plain; charset=utf-16be"),
    _masked(b"\xff\xfe\x00\x00", b"\xff\xff\x00\x00", "text/plain; charset=utf-16le"),
    _masked(b"\xef\xbb\xbf\x00", b"\xff\xff\xff\x00", "text/plain; charset=utf-8"),
    _exact(b"\x00\x00\x01\x00", "image/x-icon"),
    _exact(b"\x00\x00\x02\x00", "image/x-icon"),
    _exact(b"BM", "image/bmp"),
    _exact(b"GIF87a", "image/gif"),
    _exact(b"GIF89a", "image/gif"),
    _masked(
        b"RIFF\x00\x00\x00\x00WEBPVP",
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        "image/webp",
    ),
    _exact(b"\x89PNG\r\n\x1a\n", "image/png"),
    _exact(b"\xff\xd8\xff", "image/jpeg"),
    _masked(b"FORM\x00\x00\x00\x00AIFF", b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", "audio/aiff"),
    _masked(b"ID3", b"\xff\xff\xff", "audio/mpeg"),
    _masked(b"OggS\x00", b"\xff\xff\xff\xff\xff", "application/ogg"),
    _masked(b"MThd\x00\x00\x00\x06", b"\xff" * 8, "audio/midi"),
    _masked(b"RIFF\x00\x00\x00\x00AVI ", b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", "video/avi"),
    _masked(b"RIFF\x00\x00\x00\x00WAVE", b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", "audio/wave"),
    _mp4,
    _exact(b"\x1a\x45\xdf\xa3", "video/webm"),
    _masked(b"\x00" * 34 + b"LP", b"\x00" * 34 + b"\xff\xff", "application/vnd.ms-fontobject"),
    _exact(b"\x00\x01\x00\x00", "font/ttf"),
    _exact(b"OTTO", "font/otf"),
    _exact(b"ttcf", "font/collection"),
    _exact(b"wOFF", "font/woff"),
    _exact(b"wOF2", "font/woff2"),
    _exact(b"\x1f\x8b\x08", "application/x-gzip"),
    _exact(b"PK\x03\x04", "application/zip"),
    _exact(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _exact(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _exact(b"\x00asm", "application/wasm"),
    _text,
)


def detect_content_type(data: bytes) -> str:
    """Classify ``data`` by its leading bytes.

    Always returns a valid MIME type; ``application/octet-stream`` when
    nothing more specific matches.

    Example:
        >>> detect_content_type(b"  <html><body>hi</body></html>")
        'text/html; charset=utf-8'
        >>> detect_content_type(b"\\x89PNG\\r\\n\\x1a\\n\\x00\\x00")
        'image/png'
        >>> detect_content_type(b"Attachment Test")
        'text/plain; charset=utf-8'
        >>> detect_content_type(b"\\x00\\x01\\x02\\x03\\x04")
        'application/octet-stream'
    """
    data = data[:SNIFF_LENGTH]
    first_non_ws = 0
    while first_non_ws < len(data) and data[first_non_ws] in _WHITESPACE:
        first_non_ws += 1

    for signature in _SIGNATURES:
        content_type = signature(data, first_non_ws)
        if content_type is not None:
            return content_type
    return DEFAULT_CONTENT_TYPE


_BOMS: Final[tuple[tuple[bytes, str], ...]] = (
    (b"\xfe\xff", "utf-16be"),
    (b"\xff\xfe", "utf-16le"),
    (b"\xef\xbb\xbf", "utf-8"),
)

_META_CHARSET: Final[re.Pattern[bytes]] = re.compile(
    rb"<meta\s[^>]*?charset\s*=\s*[\"']?\s*([A-Za-z0-9._:-]+)",
    re.IGNORECASE,
)

_CHARSET_PARAM: Final[re.Pattern[str]] = re.compile(
    r";\s*charset\s*=\s*\"?([^\";\s]+)\"?",
    re.IGNORECASE,
)

# Text codecs Python knows that no web charset label maps to.
_NON_WEB_CODECS: Final[frozenset[str]] = frozenset(
    {"idna", "punycode", "unicode-escape", "raw-unicode-escape", "mbcs", "oem", "palmos", "utf-7"}
)

# Python codec names whose WHATWG label differs from a plain underscore-to-hyphen rewrite.
_WHATWG_NAMES: Final[dict[str, str]] = {
    "ascii": "windows-1252",
    "latin-1": "windows-1252",
    "iso8859-1": "windows-1252",
    "cp1252": "windows-1252",
    "utf-16": "utf-16le",
    "utf-16-le": "utf-16le",
    "utf-16-be": "utf-16be",
    "utf-8-sig": "utf-8",
    "gb2312": "gbk",
    "shift_jis": "shift_jis",
}


def _canonical_charset(label: str) -> str | None:
    """Return the lower-case WHATWG name for ``label`` or None when unknown.

    Example:
        >>> _canonical_charset("UTF8")
        'utf-8'
        >>> _canonical_charset("latin1")
        'windows-1252'
        >>> _canonical_charset("ISO-8859-2")
        'iso-8859-2'
        >>> _canonical_charset("no-such-charset") is None
        True
        >>> _canonical_charset("zlib") is None
        True
    """
    try:
        info = codecs.lookup(label.strip())
    except LookupError:
        return None
    # bytes-to-bytes and str-to-str codecs such as zlib, hex or rot13
    if not getattr(info, "_is_text_encoding", True):
        return None
    name = info.name
    if name in _NON_WEB_CODECS:
        return None
    if name in _WHATWG_NAMES:
        return _WHATWG_NAMES[name]
    if name.startswith("iso8859-"):
        return "iso-" + name[3:]
    if name.startswith("cp125"):
        return "windows-" + name[2:]
    return name.replace("_", "-")


def _declared_charset(content_type: str) -> str | None:
    match = _CHARSET_PARAM.search(content_type)
    if match is None:
        return None
    return _canonical_charset(match.group(1))


def _meta_charset(data: bytes) -> str | None:
    match = _META_CHARSET.search(data)
    if match is None:
        return None
    return _canonical_charset(match.group(1).decode("ascii"))


def _sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    return 2


def _looks_like_utf8(data: bytes, *, truncated: bool = False) -> bool:
    """Return True when ``data`` holds non-ASCII bytes that decode as UTF-8.

    With ``truncated`` set, an incomplete sequence at the very end is
    ignored because the sniffing window may have cut it. Without it, a
    trailing lead byte counts as invalid UTF-8, so a short payload such as
    ``b"\\xc3\\xa9\\xc3"`` is not reported as UTF-8. This is deliberate and
    stricter than decoders that always drop a dangling lead byte.

    Example:
        >>> _looks_like_utf8("caf\\u00e9".encode())
        True
        >>> _looks_like_utf8("caf\\u00e9".encode()[:-1], truncated=True)
        True
        >>> _looks_like_utf8(b"caf\\xe9")
        False
        >>> _looks_like_utf8(b"\\xc3\\xa9\\xc3")
        False
    """
    if all(byte < 0x80 for byte in data):
        return False
    if truncated:
        for index in range(len(data) - 1, max(len(data) - 4, -1), -1):
            byte = data[index]
            if byte < 0x80:
                break
            if byte >= 0xC0:
                if len(data) - index < _sequence_length(byte):
                    data = data[:index]
                break
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def determine_charset(data: bytes, content_type: str = "") -> str:
    """Return the character encoding most likely used by ``data``.

    Args:
        data: Raw payload bytes.
        content_type: MIME type of the payload, possibly with a ``charset``
            parameter that takes precedence over sniffing.

    Returns:
        Lower-case encoding name such as ``utf-8`` or ``windows-1252``.

    Example:
        >>> determine_charset("h\\u00e9llo".encode())
        'utf-8'
        >>> determine_charset(b"plain ascii")
        'windows-1252'
        >>> determine_charset(b"plain ascii", "text/plain; charset=utf-8")
        'utf-8'
        >>> determine_charset(b'<meta charset="iso-8859-2"><p>x</p>')
        'iso-8859-2'
    """
    truncated = len(data) > CHARSET_SNIFF_LENGTH
    data = data[:CHARSET_SNIFF_LENGTH]

    for bom, charset in _BOMS:
        if data.startswith(bom):
            return charset

    declared = _declared_charset(content_type) if content_type else None
    if declared is not None:
        return declared

    meta = _meta_charset(data) if data else None
    if meta is not None:
        return meta

    if _looks_like_utf8(data, truncated=truncated):
        return "utf-8"
    return DEFAULT_CHARSET


__all__ = [
    "CHARSET_SNIFF_LENGTH",
    "DEFAULT_CHARSET",
    "DEFAULT_CONTENT_TYPE",
    "SNIFF_LENGTH",
    "TEXT_CONTENT_TYPE",
    "detect_content_type",
    "determine_charset",
]
