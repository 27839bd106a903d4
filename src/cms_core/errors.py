"""
Domain error taxonomy.

Every failure raised by value objects, entities and the content domain
service is a DomainError subclass. The domain never catches these itself;
the calling layer decides how to surface them (see cms_core.api.errors).
"""

from __future__ import annotations


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ValidationError(DomainError, ValueError):
    """Input violates a value object rule or a business precondition."""

    code = "validation_error"


class ConflictError(DomainError):
    """A uniqueness constraint is violated."""

    code = "conflict"


class StateError(DomainError):
    """Entity method called from a state that does not permit it."""

    code = "invalid_state"

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        field: str | None = "status",
    ) -> None:
        self.current_state = current_state
        super().__init__(message, field=field)


class ResourceExhaustedError(DomainError):
    """A bounded search ran out of attempts."""

    code = "resource_exhausted"

    def __init__(self, message: str, *, attempts: int, field: str | None = None) -> None:
        self.attempts = attempts
        super().__init__(message, field=field)
