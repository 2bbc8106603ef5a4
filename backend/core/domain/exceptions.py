"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler in
``core.domain.exception_handler`` maps them to HTTP responses.

Mapping cheatsheet
------------------
┌───────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception      │ DRF / HTTP equivalent        │ Code │
├───────────────────────┼──────────────────────────────┼──────┤
│ DomainError           │ ValidationError / 400        │ 400  │
│ DomainValidationError │ ValidationError / 400        │ 400  │
│ PermissionDenied      │ PermissionDenied / 403       │ 403  │
│ NotFound              │ NotFound / 404               │ 404  │
│ Conflict              │ APIException / 409           │ 409  │
└───────────────────────┴──────────────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import Conflict

    if project.reward_distributed:
        raise Conflict("Reward already distributed for this project.")
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class DomainValidationError(DomainError):
    """
    Input failed a business rule.

    ``errors`` maps field names to lists of messages (the same shape DRF
    uses for serializer errors).  ``extra`` holds any additional values the
    caller needs to correct its input; both are merged into the 400 body.

    Example::

        raise DomainValidationError(
            "Percentages must add up to 100%.",
            errors={"creatorPercentage": ["Currently 95%."]},
            extra={"total": 95},
        )
    """

    def __init__(
        self,
        message: str = "Invalid input.",
        *,
        errors: dict[str, list[str]] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}
        self.extra = extra or {}

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body sent back to the client."""
        payload: dict[str, Any] = {"detail": self.message}
        if self.errors:
            payload["errors"] = self.errors
        payload.update(self.extra)
        return payload


class PermissionDenied(DomainError):
    """
    The authenticated user does not have the required permission
    for this operation.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The requested resource does not exist (or is not visible to the
    requesting user).

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: editing a record that has been frozen, repeating a
    one-shot state change.  Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)
