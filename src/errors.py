"""Application errors.

Every failure a request can end in is one of these. The API layer renders them
as ``{"error": <reason>, "message": <text>}`` with the class's status code:

    AppError
      ├── NotFoundError (404)            resource absent
      ├── AccessDeniedError (403)        authorization denied, reason names the rule
      │     └── CannotRemoveOwnerError (400)
      ├── QuotaExceededError (403)       free plan ceiling reached
      ├── ConflictError (400)            already-member, already-premium
      └── InvalidCredentialError (401)   any token verification failure

Services raise these before touching the session, so a raised error never
leaves a partial write behind.
"""

from typing import Any


class AppError(Exception):
    """Base class for errors returned to API clients."""

    status_code = 500
    reason = "internal"

    def __init__(self, message: str | None = None, reason: str | None = None) -> None:
        if reason is not None:
            self.reason = reason
        self.message = message or self.reason
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.reason, "message": self.message}


class NotFoundError(AppError):
    status_code = 404
    reason = "not-found"

    def __init__(
        self, resource: str, resource_id: int | str | None = None, reason: str | None = None
    ) -> None:
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} {resource_id} not found"
        super().__init__(message, reason=reason)


class AccessDeniedError(AppError):
    """The actor is known but not allowed to perform the action."""

    status_code = 403
    reason = "forbidden"


class CannotRemoveOwnerError(AccessDeniedError):
    status_code = 400
    reason = "cannot-remove-owner"


class QuotaExceededError(AppError):
    status_code = 403
    reason = "quota-exceeded"


class ConflictError(AppError):
    status_code = 400
    reason = "conflict"


class InvalidCredentialError(AppError):
    """Token missing, malformed, expired, badly signed or for an unknown user.

    All cases produce the same response.
    """

    status_code = 401
    reason = "invalid-credential"

    def __init__(self) -> None:
        super().__init__("Invalid authentication credentials")
