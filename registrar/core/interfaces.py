"""
Core interfaces for the registrar ledger.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import AcademicRecord, Course, GradeRecord, Student


class RecordReader(ABC):
    """Read access to the four keyed collections."""

    @abstractmethod
    def get_student(self, student_id: int) -> Optional[Student]:
        """Get a student by id."""
        pass

    @abstractmethod
    def get_course(self, course_id: int) -> Optional[Course]:
        """Get a course by id."""
        pass

    @abstractmethod
    def get_grade(self, student_id: int, course_id: int) -> Optional[GradeRecord]:
        """Get the live grade record for a (student, course) pair."""
        pass

    @abstractmethod
    def get_academic_record(self, student_id: int) -> Optional[AcademicRecord]:
        """Get a student's academic record, absent before the first grade."""
        pass

    @abstractmethod
    def grades_for_student(self, student_id: int) -> List[GradeRecord]:
        """Get all grade records of a student, ordered by course id."""
        pass
