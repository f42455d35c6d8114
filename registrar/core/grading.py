"""
Academic arithmetic: grade points and GPA aggregation.

Grade points use the standard letter-grade scale, scaled by 10 so they stay
integral (an A is 40, a B- is 27). Cumulative GPA is stored scaled by 100.
"""

from typing import Iterable, List, Optional, Tuple

from .entities import AcademicRecord, GradeRecord

PASSING_GRADE = 60
POINTS_SCALE = 10
GPA_SCALE = 100

# (lower bound, grade points x10, letter), highest band first
GRADE_BANDS: List[Tuple[int, int, str]] = [
    (93, 40, "A"),
    (90, 37, "A-"),
    (87, 33, "B+"),
    (83, 30, "B"),
    (80, 27, "B-"),
    (77, 23, "C+"),
    (73, 20, "C"),
    (70, 17, "C-"),
    (67, 13, "D+"),
    (63, 10, "D"),
    (0, 0, "F"),
]


def _band(grade: int) -> Tuple[int, int, str]:
    for band in GRADE_BANDS:
        if grade >= band[0]:
            return band
    return GRADE_BANDS[-1]


def grade_to_points(grade: int) -> int:
    """Map a 0-100 grade to grade points on the x10 scale."""
    return _band(grade)[1]


def letter_grade(grade: int) -> str:
    return _band(grade)[2]


def is_passing(grade: int) -> bool:
    return grade >= PASSING_GRADE


def calculate_gpa(weighted_points: Iterable[Tuple[int, int]]) -> int:
    """Credit-weighted mean of grade points, scaled by 100.

    ``weighted_points`` yields ``(grade_points, credits)`` pairs. Integer
    floor division keeps the result identical however it is recomputed.
    """
    total_points = 0
    total_credits = 0
    for points, credits in weighted_points:
        total_points += points * credits
        total_credits += credits
    if total_credits == 0:
        return 0
    return total_points * (GPA_SCALE // POINTS_SCALE) // total_credits


def format_gpa(scaled_gpa: int) -> str:
    """Render a x100 GPA as a decimal string, e.g. 367 -> '3.67'."""
    return f"{scaled_gpa // GPA_SCALE}.{scaled_gpa % GPA_SCALE:02d}"


def recompute_academic_record(prior: Optional[AcademicRecord], student_id: int,
                              course_credits: int, new_grade: int,
                              completed_grades: Iterable[Tuple[GradeRecord, int]]) -> AcademicRecord:
    """Apply one grade submission to a student's academic record.

    ``prior`` is None before the student's first grade. ``completed_grades``
    must be every completed grade record of the student *after* the
    submission, each paired with its course's credit weight; the GPA is
    rebuilt from them rather than adjusted incrementally.
    """
    base = prior if prior is not None else AcademicRecord(student_id=student_id)
    passed = is_passing(new_grade)

    gpa = calculate_gpa(
        (record.grade_points, credits)
        for record, credits in completed_grades
        if record.completed
    )

    return AcademicRecord(
        student_id=student_id,
        cumulative_gpa=gpa,
        total_credits_attempted=base.total_credits_attempted + course_credits,
        total_credits_earned=base.total_credits_earned + (course_credits if passed else 0),
        honors=base.honors,
        academic_warnings=base.academic_warnings + (0 if passed else 1),
    )
