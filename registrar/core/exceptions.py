"""
Typed errors for the registrar ledger.

Each subclass corresponds to one ErrorCode. They are raised by the
validation layer and the record service, and converted into a failed
OperationResult at the public operation boundary.
"""

from typing import Optional, Any, Dict

from .enums import ErrorCode


class RegistrarException(Exception):
    """Base exception for all registrar errors."""

    error_code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}


class NotAuthorizedError(RegistrarException):
    """Raised when the caller is not an administrator."""
    error_code = ErrorCode.NOT_AUTHORIZED


class StudentExistsError(RegistrarException):
    """Raised when adding a student whose id is already registered."""
    error_code = ErrorCode.STUDENT_EXISTS


class CourseExistsError(RegistrarException):
    """Raised when adding a course whose id is already registered."""
    error_code = ErrorCode.COURSE_EXISTS


class StudentNotFoundError(RegistrarException):
    """Raised when a referenced student does not exist."""
    error_code = ErrorCode.STUDENT_NOT_FOUND


class CourseNotFoundError(RegistrarException):
    """Raised when a referenced course does not exist."""
    error_code = ErrorCode.COURSE_NOT_FOUND


class InvalidGradeError(RegistrarException):
    """Raised when a grade is outside 0..100."""
    error_code = ErrorCode.INVALID_GRADE


class InvalidSemesterError(RegistrarException):
    """Raised when a semester is outside 1..3."""
    error_code = ErrorCode.INVALID_SEMESTER


class InvalidYearError(RegistrarException):
    """Raised when a year is outside 2000..2100."""
    error_code = ErrorCode.INVALID_YEAR


class InvalidCreditsError(RegistrarException):
    """Raised when a credit weight is outside 1..6."""
    error_code = ErrorCode.INVALID_CREDITS


class InvalidNameLengthError(RegistrarException):
    """Raised when a name or free-text field has the wrong length."""
    error_code = ErrorCode.INVALID_NAME_LENGTH


class PrerequisiteNotMetError(RegistrarException):
    """Raised when a student has not satisfied a course's prerequisites."""
    error_code = ErrorCode.PREREQUISITE_NOT_MET


class InvalidPrincipalError(RegistrarException):
    """Raised when a principal cannot be granted administrator rights."""
    error_code = ErrorCode.INVALID_PRINCIPAL


class InvalidInputError(RegistrarException):
    """Raised for malformed ids and other out-of-range input."""
    error_code = ErrorCode.INVALID_INPUT
