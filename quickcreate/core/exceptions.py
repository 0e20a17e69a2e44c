from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    code = "service_error"

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidCode(ServiceError):
    """Sub-account code missing or blank."""

    code = "invalid_code"

    def __init__(self, message: str = "Sub-account code is required") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class InvalidCodeLength(ServiceError):
    code = "invalid_code_length"

    def __init__(self, code: str, expected_length: int) -> None:
        super().__init__(
            f"Sub-account code '{code}' must be exactly {expected_length} characters long",
            status.HTTP_400_BAD_REQUEST,
        )
        self.expected_length = expected_length


class DuplicateCode(ServiceError):
    code = "duplicate_code"

    def __init__(self, code: str) -> None:
        super().__init__(
            f"Sub-account '{code}' already exists in this exercise",
            status.HTTP_409_CONFLICT,
        )


class ParentNotFound(ServiceError):
    code = "parent_not_found"

    def __init__(self, message: str = "Parent account not found") -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ExerciseNotFound(ServiceError):
    code = "exercise_not_found"

    def __init__(self, message: str = "Exercise not found") -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ExerciseClosed(ServiceError):
    code = "exercise_closed"

    def __init__(self, message: str = "This exercise is closed and cannot be modified") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class CodeSpaceExhausted(ServiceError):
    """Every suffix under a parent account is already taken."""

    code = "code_space_exhausted"

    def __init__(self, parent_code: str, max_suffix: int) -> None:
        super().__init__(
            f"No free sub-account code left under account '{parent_code}' (suffixes 1-{max_suffix} are taken)",
            status.HTTP_409_CONFLICT,
        )


class DuplicateReference(ServiceError):
    code = "duplicate_reference"

    def __init__(self, reference: str) -> None:
        super().__init__(
            f"Product with reference '{reference}' already exists",
            status.HTTP_409_CONFLICT,
        )


class RelatedRecordNotFound(ServiceError):
    code = "related_record_not_found"

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)
