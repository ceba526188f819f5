"""Domain exceptions for the diary service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class DiaryException(Exception):
    """Base exception for all diary service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DiaryException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(DiaryException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(DiaryException):
    """Raised when the principal lacks the scope required for the operation."""

    def __init__(self, scope: str | None = None, message: str = "Permission denied") -> None:
        """Initialize with optional missing scope.

        Args:
            scope: Scope that was required (e.g. 'tokens.manage').
            message: Human-readable message; replaced when scope is given.
        """
        details: dict[str, Any] = {}
        if scope:
            message = f"Permission denied: scope '{scope}' required"
            details["scope"] = scope
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(DiaryException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'diary_entry', 'email_settings').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateTokenException(DiaryException):
    """Raised when a generated token id collides with an existing record.

    The id is the hash of the secret, so a collision is never overwritten.
    """

    def __init__(self, token_id: str) -> None:
        super().__init__(
            "Personal access token already exists",
            "DUPLICATE_TOKEN",
            {"token_id": token_id},
        )


class EmailDeliveryException(DiaryException):
    """Raised when the email backend rejects or fails to accept a message."""

    def __init__(self, recipient: str, reason: str) -> None:
        super().__init__(
            f"Failed to send email to {recipient}",
            "EMAIL_DELIVERY_ERROR",
            {"recipient": recipient, "reason": reason},
        )


class RecommendationGenerationException(DiaryException):
    """Raised when the LLM call for a recommendation fails."""

    def __init__(self, user_id: str, reason: str) -> None:
        super().__init__(
            "Failed to generate recommendation",
            "RECOMMENDATION_ERROR",
            {"user_id": user_id, "reason": reason},
        )
