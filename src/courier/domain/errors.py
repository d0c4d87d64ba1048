"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class CourierError(Exception):
    """Base class for every failure raised while preparing or sending an email.

    Example:
        >>> from courier.domain.errors import CourierError, DeliveryError
        >>> issubclass(DeliveryError, CourierError)
        True
    """


class ConfigurationError(CourierError):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values (such as the SparkPost API key)
    are absent or malformed. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> err = ConfigurationError("No SparkPost API key configured")
        >>> str(err)
        'No SparkPost API key configured'
    """


class UnsupportedContentError(CourierError, TypeError):
    """The email carries a content value that is neither simple nor templated.

    Raised before any transport call. Inherits from TypeError because the
    failure is about the type of ``Email.content``.

    Example:
        >>> err = UnsupportedContentError("Unsupported content type: str")
        >>> isinstance(err, TypeError)
        True
    """


class MalformedSenderError(CourierError, ValueError):
    """The sender address cannot be split into local part and domain.

    Example:
        >>> err = MalformedSenderError("Malformed sender address: 'nobody'")
        >>> isinstance(err, ValueError)
        True
    """


class AttachmentReadError(CourierError, OSError):
    """Reading the bytes of an attachment failed.

    Wraps the underlying I/O failure; the original exception is kept as
    ``__cause__``.

    Example:
        >>> err = AttachmentReadError("Cannot read attachment report.pdf")
        >>> str(err)
        'Cannot read attachment report.pdf'
    """


class DeliveryError(CourierError):
    """The email provider rejected the transmission or could not be reached.

    Carries the vendor's message unchanged plus the HTTP status code when one
    was received.

    Example:
        >>> err = DeliveryError("Unauthorized.", status_code=401)
        >>> str(err), err.status_code
        ('Unauthorized.', 401)
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "AttachmentReadError",
    "ConfigurationError",
    "CourierError",
    "DeliveryError",
    "MalformedSenderError",
    "UnsupportedContentError",
]
