"""
Custom exception classes for the application.
Each class carries the HTTP status the API layer answers with.
"""

from typing import Any, Optional, Dict


class ContentCastError(Exception):
    """Base exception class for ContentCast backend."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ContentCastError):
    """Raised when a required setting (usually an API key) is missing."""

    status_code = 503

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)


class DatabaseError(ContentCastError):
    """Raised when there's a database error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DATABASE_ERROR", details)


class ValidationError(ContentCastError):
    """Raised when request data validation fails."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundError(ContentCastError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NOT_FOUND", details)


class RateLimitError(ContentCastError):
    """Raised when an action is not allowed yet (cooldown or daily cap)."""

    status_code = 429

    def __init__(
        self,
        message: str,
        code: str = "RATE_LIMIT_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)


class ExternalServiceError(ContentCastError):
    """Raised when an external service error occurs."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "EXTERNAL_SERVICE_ERROR", details)


# Resource-specific exceptions
class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, user_ref: str):
        super().__init__(
            "User not found",
            {"user": user_ref}
        )


class DraftNotFoundError(NotFoundError):
    """Raised when a content draft is not found."""

    def __init__(self, draft_id: str):
        super().__init__(
            "Draft not found",
            {"draft_id": draft_id}
        )


# Ledger exceptions
class QuestCooldownError(RateLimitError):
    """Raised when a quest is completed before its cooldown elapsed."""

    def __init__(self, user_id: str, quest_type: str):
        super().__init__(
            "Quest is on cooldown",
            "QUEST_COOLDOWN",
            {"user_id": user_id, "quest_type": quest_type}
        )


class DailyCastLimitError(RateLimitError):
    """Raised when the per-day cast cap is reached."""

    def __init__(self, max_daily_casts: int):
        super().__init__(
            f"Daily cast limit reached. You can publish at most {max_daily_casts} casts per day.",
            "DAILY_LIMIT_EXCEEDED",
            {"maxDailyCasts": max_daily_casts}
        )
