import pytest

from registrar.core import validation
from registrar.core.enums import ErrorCode
from registrar.core.exceptions import (
    InvalidCreditsError, InvalidGradeError, InvalidInputError,
    InvalidNameLengthError, InvalidSemesterError, InvalidYearError,
)


@pytest.mark.parametrize("value,expected", [
    (0, False), (1, True), (100000, True), (100001, False), (True, False), ("5", False),
])
def test_student_id_bounds(value, expected):
    assert validation.is_valid_student_id(value) is expected


@pytest.mark.parametrize("value,expected", [(0, False), (1, True), (10000, True), (10001, False)])
def test_course_id_bounds(value, expected):
    assert validation.is_valid_course_id(value) is expected


def test_year_semester_credits_grade_bounds():
    assert validation.is_valid_year(2000) and validation.is_valid_year(2100)
    assert not validation.is_valid_year(1999) and not validation.is_valid_year(2101)
    assert validation.is_valid_semester(1) and validation.is_valid_semester(3)
    assert not validation.is_valid_semester(0) and not validation.is_valid_semester(4)
    assert validation.is_valid_credits(1) and validation.is_valid_credits(6)
    assert not validation.is_valid_credits(0) and not validation.is_valid_credits(7)
    assert validation.is_valid_grade(0) and validation.is_valid_grade(100)
    assert not validation.is_valid_grade(-1) and not validation.is_valid_grade(101)


def test_name_and_text_lengths():
    assert not validation.is_valid_name("A")
    assert validation.is_valid_name("Al")
    assert not validation.is_valid_name("x" * 101)
    assert not validation.is_valid_text("", 50)
    assert validation.is_valid_text("X", 50)
    assert not validation.is_valid_text(None, 50)


@pytest.mark.parametrize("call,error,code", [
    (lambda: validation.require_student_id(0), InvalidInputError, ErrorCode.INVALID_INPUT),
    (lambda: validation.require_year(1999), InvalidYearError, ErrorCode.INVALID_YEAR),
    (lambda: validation.require_semester(4), InvalidSemesterError, ErrorCode.INVALID_SEMESTER),
    (lambda: validation.require_credits(7), InvalidCreditsError, ErrorCode.INVALID_CREDITS),
    (lambda: validation.require_grade(101), InvalidGradeError, ErrorCode.INVALID_GRADE),
    (lambda: validation.require_name("A"), InvalidNameLengthError, ErrorCode.INVALID_NAME_LENGTH),
])
def test_require_raises_matching_error(call, error, code):
    with pytest.raises(error) as excinfo:
        call()
    assert excinfo.value.error_code is code


def test_prerequisite_list_rules():
    assert validation.require_prerequisites([101, 102], 201) == (101, 102)
    assert validation.require_prerequisites(None, 201) == ()
    with pytest.raises(InvalidInputError):
        validation.require_prerequisites(list(range(1, 12)), 201)
    with pytest.raises(InvalidInputError):
        validation.require_prerequisites([201], 201)
    with pytest.raises(InvalidInputError):
        validation.require_prerequisites([101, 101], 201)
    with pytest.raises(InvalidInputError):
        validation.require_prerequisites([0], 201)
