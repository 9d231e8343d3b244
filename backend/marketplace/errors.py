"""Domain error taxonomy.

Every failure a service can detect is raised as one of the ``AppError``
subclasses below. The boundary (see ``marketplace.main``) turns them into
the wire envelope without inspecting anything but these attributes.
"""

ERROR_MESSAGES = {
    "VALIDATION_ERROR": "Validation error",
    "UNAUTHORIZED": "Unauthorized",
    "FORBIDDEN": "Forbidden",
    "NOT_FOUND": "Resource not found",
    "CONFLICT": "Conflict",
    "INTERNAL_SERVER_ERROR": "Internal server error",
    "INVALID_CREDENTIALS": "Invalid credentials",
    "EMAIL_OR_USERNAME_TAKEN": "Email or username is already taken",
    "USER_NOT_FOUND": "User not found",
    "ROLE_NOT_FOUND": "Role not found",
    "BUSINESS_NOT_FOUND": "Business not found",
    "BUSINESS_NOT_APPROVED": "Business is not approved",
    "JOB_NOT_FOUND": "Job not found",
    "JOB_APPLICATION_NOT_FOUND": "Job application not found",
    "CONTRIBUTOR_PROFILE_NOT_FOUND": "Contributor profile not found",
    "CONTRIBUTOR_NOT_ACTIVE": "Contributor is not active",
    "ARTICLE_NOT_FOUND": "Article not found",
    "EVENT_NOT_FOUND": "Event not found",
    "EVENT_REGISTRATION_NOT_FOUND": "Event registration not found",
    "PAYMENT_NOT_FOUND": "Payment not found",
    "ALREADY_REGISTERED": "Already registered for this event",
}


def field_error(field: str, message: str) -> dict:
    return {"field": field, "message": message}


class AppError(Exception):
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str | None = None, details: list[dict] | None = None,
                 error_code: str | None = None):
        if error_code:
            self.error_code = error_code
        self.message = message or ERROR_MESSAGES.get(self.error_code, "Internal server error")
        self.details = details
        super().__init__(self.message)

    def to_envelope(self) -> dict:
        return {
            "success": False,
            "code": self.status_code,
            "message": self.message,
            "error": {"code": self.error_code, "details": self.details},
        }


class ValidationError(AppError):
    status_code = 422
    error_code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    status_code = 403
    error_code = "FORBIDDEN"


class NotFoundError(AppError):
    """404 for a specific entity kind, e.g. ``NotFoundError("JOB_NOT_FOUND")``."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, error_code: str = "NOT_FOUND", message: str | None = None):
        super().__init__(message=message, error_code=error_code)


class ConflictError(AppError):
    status_code = 409
    error_code = "CONFLICT"


class InternalError(AppError):
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"
