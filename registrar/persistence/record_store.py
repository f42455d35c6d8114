"""
In-memory record store holding the four keyed collections.

Durability and replication belong to the host; this store only guarantees
that a WriteSet is applied as one unit and that readers never see half of
one.
"""

import copy
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from ..core.entities import AcademicRecord, Course, GradeRecord, Student
from ..core.interfaces import RecordReader

T = TypeVar("T")


@dataclass
class WriteSet:
    """Rows to be written together by a single mutating operation."""
    students: List[Student] = field(default_factory=list)
    courses: List[Course] = field(default_factory=list)
    grades: List[GradeRecord] = field(default_factory=list)
    academic_records: List[AcademicRecord] = field(default_factory=list)


class RecordStore(RecordReader):
    """Students, courses, grade records and academic records keyed by id."""

    def __init__(self):
        self._students: Dict[int, Student] = {}
        self._courses: Dict[int, Course] = {}
        self._grades: Dict[Tuple[int, int], GradeRecord] = {}
        self._academic_records: Dict[int, AcademicRecord] = {}
        self._lock = threading.RLock()

    def get_student(self, student_id: int) -> Optional[Student]:
        with self._lock:
            return self._students.get(student_id)

    def get_course(self, course_id: int) -> Optional[Course]:
        with self._lock:
            return self._courses.get(course_id)

    def get_grade(self, student_id: int, course_id: int) -> Optional[GradeRecord]:
        with self._lock:
            return self._grades.get((student_id, course_id))

    def get_academic_record(self, student_id: int) -> Optional[AcademicRecord]:
        with self._lock:
            return self._academic_records.get(student_id)

    def grades_for_student(self, student_id: int) -> List[GradeRecord]:
        with self._lock:
            records = [record for (sid, _), record in self._grades.items() if sid == student_id]
        return sorted(records, key=lambda record: record.course_id)

    def has_student(self, student_id: int) -> bool:
        with self._lock:
            return student_id in self._students

    def has_course(self, course_id: int) -> bool:
        with self._lock:
            return course_id in self._courses

    def locked(self):
        """The store lock, for readers that must see commits whole."""
        return self._lock

    def commit(self, writes: WriteSet,
               on_commit: Optional[Callable[[], T]] = None) -> Optional[T]:
        """Apply every row of the write set at once.

        ``on_commit`` runs under the same lock right after the rows land, so
        whatever it records (the audit entry) becomes visible together with
        them. Its return value is passed back.
        """
        with self._lock:
            for student in writes.students:
                self._students[student.student_id] = student
            for course in writes.courses:
                self._courses[course.course_id] = course
            for grade in writes.grades:
                self._grades[grade.key] = grade
            for record in writes.academic_records:
                self._academic_records[record.student_id] = record
            if on_commit is not None:
                return on_commit()
            return None

    def counts(self) -> Dict[str, int]:
        """Get the number of rows in each collection."""
        with self._lock:
            return {
                'students': len(self._students),
                'courses': len(self._courses),
                'grades': len(self._grades),
                'academic_records': len(self._academic_records),
            }

    def snapshot(self) -> Dict[str, Any]:
        """Get a deep copy of every collection."""
        with self._lock:
            return copy.deepcopy({
                'students': self._students,
                'courses': self._courses,
                'grades': self._grades,
                'academic_records': self._academic_records,
            })
