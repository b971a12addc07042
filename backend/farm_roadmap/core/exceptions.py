"""
Custom exceptions for the application.
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError


class RoadmapError(Exception):
    """Base exception for the farming roadmap backend."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(RoadmapError):
    """Resource not found."""

    pass


class ValidationError(RoadmapError):
    """
    One or more fields violate their declared constraint.

    ``errors`` holds one ``{"field": ..., "message": ...}`` entry per violation,
    so callers can surface all of them at once or only the first.
    """

    def __init__(self, message: str, errors: Optional[list[dict[str, str]]] = None):
        self.errors = errors or []
        super().__init__(message, details=self.errors)

    @property
    def fields(self) -> list[str]:
        """Names of the violated fields, in reporting order."""
        return [error["field"] for error in self.errors]

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError, subject: str) -> "ValidationError":
        """Collect every violation reported by pydantic, keyed by dotted field path."""
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]) or subject,
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        fields = ", ".join(error["field"] for error in errors)
        return cls(f"Invalid {subject}: {fields}", errors)


class StateError(RoadmapError):
    """A milestone status transition outside the allowed table."""

    def __init__(self, message: str, current: str, target: str):
        super().__init__(message, details={"current": current, "target": target})
        self.current = current
        self.target = target


class AuthenticationError(RoadmapError):
    """Authentication failed."""

    pass


class InfrastructureError(RoadmapError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass
