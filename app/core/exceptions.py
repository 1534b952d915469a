"""Application exception classes and handlers."""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.response_schema import ErrorResponse


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


# --- Authentication (401) ---


class AuthenticationError(AppException):
    """Base authentication error."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message=message, code="AUTHENTICATION_ERROR", status_code=401)


# --- Authorization (403) ---


class AuthorizationError(AppException):
    """Session is missing or owned by another user.

    Both cases share one error so callers cannot probe for session ids.
    """

    def __init__(self, message: str = "Unauthorized session.") -> None:
        super().__init__(message=message, code="AUTHORIZATION_ERROR", status_code=403)


# --- Validation (400) ---


class NoChatHistoryError(AppException):
    """Regenerate requested for a session without a prior question."""

    def __init__(self, message: str = "No chat history.") -> None:
        super().__init__(message=message, code="NO_CHAT_HISTORY", status_code=400)


# --- Upstream (5xx) ---


class ProviderError(AppException):
    """Completion provider failed or returned nothing usable."""

    def __init__(self, provider: str, detail: str = "") -> None:
        self.provider = provider
        self.detail = detail
        super().__init__(
            message="AI query failed.",
            code="PROVIDER_ERROR",
            status_code=502,
        )


class PersistenceError(AppException):
    """Session store read or write failed."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            message="Session storage failed.",
            code="PERSISTENCE_ERROR",
            status_code=500,
        )


# --- Exception Handlers ---


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Central exception handler for AppException."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            status=exc.status_code, message=exc.message, code=exc.code
        ).model_dump(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures in the error envelope."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            status=422,
            message=f"{location}: {detail}" if location else detail,
            code="VALIDATION_ERROR",
        ).model_dump(),
    )
