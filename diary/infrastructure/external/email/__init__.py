"""Email content rendering and delivery backends (ACS, SMTP, log-only)."""

from diary.infrastructure.external.email.factory import build_email_sender
from diary.infrastructure.external.email.renderer import EmailContentRenderer
from diary.infrastructure.external.email.senders import (
    AcsEmailSender,
    LogOnlyEmailSender,
    SmtpEmailSender,
)

__all__ = [
    "AcsEmailSender",
    "EmailContentRenderer",
    "LogOnlyEmailSender",
    "SmtpEmailSender",
    "build_email_sender",
]
