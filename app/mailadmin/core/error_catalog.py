from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    UNAUTHORIZED = ErrorDefinition("UNAUTHORIZED", "Unauthorized", status.HTTP_401_UNAUTHORIZED)
    FORBIDDEN = ErrorDefinition("UNAUTHORIZED", "Unauthorized", status.HTTP_403_FORBIDDEN)
    INVALID_CREDENTIALS = ErrorDefinition(
        "INVALID_CREDENTIALS",
        "Wrong password or invalid user",
        status.HTTP_401_UNAUTHORIZED,
    )
    CURRENT_PASSWORD_INVALID = ErrorDefinition(
        "CURRENT_PASSWORD_INVALID",
        "Current password invalid",
        status.HTTP_400_BAD_REQUEST,
    )
    PASSWORD_POLICY = ErrorDefinition(
        "PASSWORD_POLICY",
        "Password is invalid.",
        status.HTTP_400_BAD_REQUEST,
    )
    NOT_FOUND = ErrorDefinition(
        "NOT_FOUND",
        "Record not found",
        status.HTTP_404_NOT_FOUND,
    )
    CONFLICT = ErrorDefinition(
        "CONFLICT",
        "The change conflicts with an existing record",
        status.HTTP_409_CONFLICT,
    )
    INVALID_RANGE = ErrorDefinition(
        "INVALID_RANGE",
        "Row range start must not exceed end",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    DB_UNAVAILABLE = ErrorDefinition(
        "DB_UNAVAILABLE",
        "Database unavailable",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)
