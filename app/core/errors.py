from __future__ import annotations


class AppError(Exception):
    status_code = 500
    code = "E_INTERNAL"
    default_message = "Unexpected error, please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    code = "E_VALIDATION"
    default_message = "Invalid request."


class AuthenticationError(AppError):
    status_code = 401
    code = "E_UNAUTHORIZED"
    default_message = "Authentication required."


class ForbiddenError(AppError):
    status_code = 403
    code = "E_FORBIDDEN"
    default_message = "You are not allowed to do this."


class NotFoundError(AppError):
    status_code = 404
    code = "E_NOT_FOUND"
    default_message = "Not found."


class ConflictError(AppError):
    status_code = 409
    code = "E_CONFLICT"
    default_message = "Already exists."


class InsufficientDataError(AppError):
    status_code = 404
    code = "E_INSUFFICIENT_QUESTIONS"
    default_message = "Not enough questions available."


class GenerationError(AppError):
    status_code = 502
    code = "E_AI_GENERATION_FAILED"
    default_message = "Could not generate questions, please try again."


class InternalError(AppError):
    pass
