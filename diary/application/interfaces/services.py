"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators of application services (DIP).
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

# Returns the current instant as an aware UTC datetime.
Clock = Callable[[], datetime]


# Email sender interface
class IEmailSender(Protocol):
    """Protocol for transactional email delivery."""

    async def send(
        self, to: str, subject: str, html_body: str, plain_text_body: str
    ) -> str:
        """Hand the message to the provider and return its operation id.

        Returns once the provider has accepted the message, not once it is
        delivered. Raises EmailDeliveryException when not accepted.
        """


# Email content renderer interface
class IEmailContentRenderer(Protocol):
    """Protocol for building the HTML and plain-text bodies of an email."""

    def render(
        self, header: str, intro: str, message: str, outro: str
    ) -> tuple[str, str]:
        """Return (html_body, plain_text_body)."""


# LLM client interface
class ILlmClient(Protocol):
    """Protocol for a chat-completion endpoint."""

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Return the assistant message content for the given chat messages."""


# Recommendation generator interface
class IRecommendationGenerator(Protocol):
    """Protocol for producing (and persisting) a recommendation for a user."""

    async def generate(self, user_id: str) -> str:
        """Generate a recommendation, store it in history, and return its text."""
