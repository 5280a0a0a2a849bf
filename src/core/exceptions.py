"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the profile engine."""

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_OF_BIRTH = "INVALID_DATE_OF_BIRTH"
    INVALID_PLAN_TRANSITION = "INVALID_PLAN_TRANSITION"

    # Configuration errors (500)
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Server errors (500)
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Input could not be accepted for a field."""

    def __init__(
        self,
        field: str,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400,
    ) -> None:
        self.field = field
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
            details={"field": field},
        )


class InvalidDateOfBirthError(ValidationError):
    """Date of birth text does not match MM-DD-YYYY."""

    def __init__(self, value: str) -> None:
        super().__init__(
            field="date_of_birth",
            message=f"Invalid date of birth: {value!r} (expected MM-DD-YYYY)",
            error_code=ErrorCode.INVALID_DATE_OF_BIRTH,
        )


class ConfigurationError(ValidationError):
    """Required configuration is missing or malformed."""

    def __init__(self, setting: str, message: str | None = None) -> None:
        super().__init__(
            field=setting,
            message=message or f"Missing required configuration: {setting.upper()}",
            error_code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
        )


class InvariantViolationError(AppException):
    """A data invariant that should always hold was broken."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.INVARIANT_VIOLATION,
            message=message,
            status_code=500,
            details=details,
        )


class InvalidPlanTransitionError(AppException):
    """Response plan cannot move from its current state to the requested one."""

    def __init__(self, plan_id: str, current: str, requested: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_PLAN_TRANSITION,
            message=f"Response plan {plan_id} cannot go from {current} to {requested}",
            status_code=400,
            details={"plan_id": plan_id, "current": current, "requested": requested},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )
