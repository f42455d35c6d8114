"""
Enumerations and constants for the registrar ledger.
"""

from enum import Enum


class ErrorCode(Enum):
    """Typed, non-retryable outcomes of a rejected operation."""
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    STUDENT_EXISTS = "STUDENT_EXISTS"
    COURSE_EXISTS = "COURSE_EXISTS"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    INVALID_GRADE = "INVALID_GRADE"
    INVALID_SEMESTER = "INVALID_SEMESTER"
    INVALID_YEAR = "INVALID_YEAR"
    INVALID_CREDITS = "INVALID_CREDITS"
    INVALID_NAME_LENGTH = "INVALID_NAME_LENGTH"
    PREREQUISITE_NOT_MET = "PREREQUISITE_NOT_MET"
    INVALID_PRINCIPAL = "INVALID_PRINCIPAL"
    INVALID_INPUT = "INVALID_INPUT"


class AuditAction(Enum):
    """Actions recorded in the audit log."""
    ADD_STUDENT = "add-student"
    UPDATE_STUDENT = "update-student"
    ADD_COURSE = "add-course"
    RECORD_GRADE = "record-grade"
    ADD_ADMINISTRATOR = "add-administrator"


DEFAULT_ACADEMIC_STANDING = "Good Standing"
