"""
Validation layer: stateless bounds checks on ledger input.

The ``is_valid_*`` predicates return pass/fail. The ``require_*`` helpers
raise the matching typed error so an operation aborts before touching state.
"""

from typing import Any, Iterable, Optional, Tuple

from .exceptions import (
    InvalidCreditsError, InvalidGradeError, InvalidInputError,
    InvalidNameLengthError, InvalidSemesterError, InvalidYearError,
)

MIN_STUDENT_ID = 1
MAX_STUDENT_ID = 100000
MIN_COURSE_ID = 1
MAX_COURSE_ID = 10000
MIN_YEAR = 2000
MAX_YEAR = 2100
MIN_SEMESTER = 1
MAX_SEMESTER = 3
MIN_CREDITS = 1
MAX_CREDITS = 6
MIN_GRADE = 0
MAX_GRADE = 100

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MIN_TEXT_LENGTH = 1
MAX_MAJOR_LENGTH = 50
MAX_DEPARTMENT_LENGTH = 50
MAX_INSTRUCTOR_LENGTH = 100
MAX_STANDING_LENGTH = 50
MAX_PREREQUISITES = 10


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid id, year or grade
    return isinstance(value, int) and not isinstance(value, bool)


def _in_range(value: Any, low: int, high: int) -> bool:
    return _is_int(value) and low <= value <= high


def is_valid_student_id(student_id: Any) -> bool:
    return _in_range(student_id, MIN_STUDENT_ID, MAX_STUDENT_ID)


def is_valid_course_id(course_id: Any) -> bool:
    return _in_range(course_id, MIN_COURSE_ID, MAX_COURSE_ID)


def is_valid_year(year: Any) -> bool:
    return _in_range(year, MIN_YEAR, MAX_YEAR)


def is_valid_semester(semester: Any) -> bool:
    return _in_range(semester, MIN_SEMESTER, MAX_SEMESTER)


def is_valid_credits(credits: Any) -> bool:
    return _in_range(credits, MIN_CREDITS, MAX_CREDITS)


def is_valid_grade(grade: Any) -> bool:
    return _in_range(grade, MIN_GRADE, MAX_GRADE)


def is_valid_name(name: Any) -> bool:
    """Student and course names: at least two characters."""
    return isinstance(name, str) and MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH


def is_valid_text(text: Any, max_length: int) -> bool:
    """Free text such as a major or an instructor: at least one character."""
    return isinstance(text, str) and MIN_TEXT_LENGTH <= len(text) <= max_length


def require_student_id(student_id: Any) -> int:
    if not is_valid_student_id(student_id):
        raise InvalidInputError(
            f"Student id must be between {MIN_STUDENT_ID} and {MAX_STUDENT_ID}",
            details={'student_id': student_id})
    return student_id


def require_course_id(course_id: Any) -> int:
    if not is_valid_course_id(course_id):
        raise InvalidInputError(
            f"Course id must be between {MIN_COURSE_ID} and {MAX_COURSE_ID}",
            details={'course_id': course_id})
    return course_id


def require_year(year: Any, field_name: str = "year") -> int:
    if not is_valid_year(year):
        raise InvalidYearError(
            f"{field_name} must be between {MIN_YEAR} and {MAX_YEAR}",
            details={field_name: year})
    return year


def require_semester(semester: Any) -> int:
    if not is_valid_semester(semester):
        raise InvalidSemesterError(
            f"Semester must be between {MIN_SEMESTER} and {MAX_SEMESTER}",
            details={'semester': semester})
    return semester


def require_credits(credits: Any) -> int:
    if not is_valid_credits(credits):
        raise InvalidCreditsError(
            f"Credits must be between {MIN_CREDITS} and {MAX_CREDITS}",
            details={'credits': credits})
    return credits


def require_grade(grade: Any, field_name: str = "grade") -> int:
    if not is_valid_grade(grade):
        raise InvalidGradeError(
            f"{field_name} must be between {MIN_GRADE} and {MAX_GRADE}",
            details={field_name: grade})
    return grade


def require_name(name: Any, field_name: str = "name") -> str:
    if not is_valid_name(name):
        raise InvalidNameLengthError(
            f"{field_name} must be {MIN_NAME_LENGTH} to {MAX_NAME_LENGTH} characters",
            details={field_name: name})
    return name


def require_text(text: Any, max_length: int, field_name: str) -> str:
    if not is_valid_text(text, max_length):
        raise InvalidNameLengthError(
            f"{field_name} must be {MIN_TEXT_LENGTH} to {max_length} characters",
            details={field_name: text})
    return text


def require_level(level: Any) -> int:
    if not _is_int(level) or level < 1:
        raise InvalidInputError("Course level must be a positive integer",
                                details={'level': level})
    return level


def require_prerequisites(prerequisites: Optional[Iterable[Any]],
                          course_id: int) -> Tuple[int, ...]:
    """Validate a prerequisite list and return it as an ordered tuple."""
    prereqs = tuple(prerequisites or ())
    if len(prereqs) > MAX_PREREQUISITES:
        raise InvalidInputError(
            f"A course may declare at most {MAX_PREREQUISITES} prerequisites",
            details={'prerequisites': list(prereqs)})
    for prereq in prereqs:
        require_course_id(prereq)
    if course_id in prereqs:
        raise InvalidInputError("A course cannot be its own prerequisite",
                                details={'course_id': course_id})
    if len(set(prereqs)) != len(prereqs):
        raise InvalidInputError("Prerequisites must not repeat",
                                details={'prerequisites': list(prereqs)})
    return prereqs
