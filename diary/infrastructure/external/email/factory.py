"""Select the email sender from settings."""

from __future__ import annotations

from diary.application.interfaces.services import IEmailSender
from diary.core.config import Settings
from diary.infrastructure.external.email.senders import (
    AcsEmailSender,
    LogOnlyEmailSender,
    SmtpEmailSender,
)


def build_email_sender(settings: Settings) -> IEmailSender:
    """Return the sender for settings.email_backend (validated at settings load)."""
    if settings.email_backend == "acs" and settings.acs_connection_string:
        return AcsEmailSender(
            settings.acs_connection_string.get_secret_value(),
            settings.email_sender_address,
            api_version=settings.acs_api_version,
        )
    if settings.email_backend == "smtp":
        return SmtpEmailSender(
            settings.smtp_host,
            settings.smtp_port,
            settings.email_sender_address,
            username=settings.smtp_username,
            password=(
                settings.smtp_password.get_secret_value() if settings.smtp_password else ""
            ),
        )
    return LogOnlyEmailSender()
