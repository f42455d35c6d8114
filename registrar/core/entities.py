"""
Core entities for the registrar ledger.

Entities are immutable values. A mutation produces a replaced copy, so a
reader holding a previously fetched value never observes a partial update.
"""

from dataclasses import dataclass, field, replace, asdict
from typing import Any, Dict, List, Optional, Tuple

from .enums import AuditAction, DEFAULT_ACADEMIC_STANDING


@dataclass(frozen=True)
class Student:
    """Student entity. Never deleted, only deactivated or updated."""
    student_id: int
    name: str
    enrollment_year: int
    major: str
    active: bool = True
    graduation_year: Optional[int] = None
    total_credits: int = 0
    academic_standing: str = DEFAULT_ACADEMIC_STANDING

    def update(self, **changes) -> 'Student':
        """Return a copy with the given attributes changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert student to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class Course:
    """Course reference data, populated by an administrator."""
    course_id: int
    name: str
    credits: int
    department: str
    active: bool = True
    prerequisites: Tuple[int, ...] = ()
    min_grade_required: int = 60
    level: int = 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert course to dictionary."""
        data = asdict(self)
        data['prerequisites'] = list(self.prerequisites)
        return data


@dataclass(frozen=True)
class GradeRecord:
    """The live grade for one (student, course) pair."""
    student_id: int
    course_id: int
    grade: int
    semester: int
    year: int
    instructor: str
    grade_points: int
    attempts: int = 1
    completed: bool = True

    @property
    def key(self) -> Tuple[int, int]:
        return (self.student_id, self.course_id)

    def resubmit(self, grade: int, semester: int, year: int,
                 instructor: str, grade_points: int) -> 'GradeRecord':
        """Overwrite the recorded attempt and count one more attempt."""
        return replace(
            self,
            grade=grade,
            semester=semester,
            year=year,
            instructor=instructor,
            grade_points=grade_points,
            attempts=self.attempts + 1,
            completed=True,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert grade record to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class AcademicRecord:
    """Derived academic totals for a student.

    ``cumulative_gpa`` is fixed point, scaled by 100 (3.67 is stored as 367).
    """
    student_id: int
    cumulative_gpa: int = 0
    total_credits_attempted: int = 0
    total_credits_earned: int = 0
    honors: Tuple[str, ...] = ()
    academic_warnings: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert academic record to dictionary."""
        data = asdict(self)
        data['honors'] = list(self.honors)
        return data


@dataclass(frozen=True)
class AuditEntry:
    """Immutable audit log entry."""
    transaction_id: int
    timestamp: int
    action: AuditAction
    principal: str
    details: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert audit entry to dictionary."""
        return {
            'transaction_id': self.transaction_id,
            'timestamp': self.timestamp,
            'action': self.action.value,
            'principal': self.principal,
            'details': self.details,
        }


@dataclass(frozen=True)
class StudentTranscript:
    """Read model returned by the transcript query.

    Both ``student`` and ``academic_record`` are None for an unknown student;
    ``academic_record`` alone is None before the first recorded grade.
    """
    student: Optional[Student] = None
    academic_record: Optional[AcademicRecord] = None
    grades: List[GradeRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'student': self.student.to_dict() if self.student else None,
            'academic_record': self.academic_record.to_dict() if self.academic_record else None,
            'grades': [grade.to_dict() for grade in self.grades],
        }


@dataclass(frozen=True)
class CourseStatistics:
    """Read model returned by the course statistics query."""
    course: Course
    active: bool
    prerequisites: List[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'course': self.course.to_dict(),
            'active': self.active,
            'prerequisites': list(self.prerequisites),
        }
