"""
Core module containing the ledger's entities, rules and error taxonomy.
"""

from .entities import *
from .exceptions import *
from .enums import *
from .context import CallContext, LogicalClock

__all__ = [
    # Entities
    "Student",
    "Course",
    "GradeRecord",
    "AcademicRecord",
    "AuditEntry",
    "StudentTranscript",
    "CourseStatistics",

    # Context
    "CallContext",
    "LogicalClock",

    # Enums
    "ErrorCode",
    "AuditAction",
    "DEFAULT_ACADEMIC_STANDING",

    # Exceptions
    "RegistrarException",
    "NotAuthorizedError",
    "StudentExistsError",
    "CourseExistsError",
    "StudentNotFoundError",
    "CourseNotFoundError",
    "InvalidGradeError",
    "InvalidSemesterError",
    "InvalidYearError",
    "InvalidCreditsError",
    "InvalidNameLengthError",
    "PrerequisiteNotMetError",
    "InvalidPrincipalError",
    "InvalidInputError",
]
