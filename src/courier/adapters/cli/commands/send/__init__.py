"""Email sending CLI commands.

Contents:
    * :func:`.send_email.cli_send_email` - Inline text/HTML email with attachments.
    * :func:`.send_template.cli_send_template` - Email rendered from a stored template.
"""

from __future__ import annotations

from .send_email import cli_send_email
from .send_template import cli_send_template

__all__ = ["cli_send_email", "cli_send_template"]
