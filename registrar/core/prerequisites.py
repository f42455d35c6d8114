"""
Prerequisite checks for grade submission.
"""

from typing import List

from .interfaces import RecordReader


class PrerequisiteChecker:
    """Single-level prerequisite check over stored grade records.

    A prerequisite is satisfied when the student holds a completed grade for
    it at or above that prerequisite's own ``min_grade_required``. Missing
    course data counts as unsatisfied. Prerequisites of prerequisites are
    not re-checked.
    """

    def __init__(self, reader: RecordReader):
        self._reader = reader

    def missing_prerequisites(self, student_id: int, course_id: int) -> List[int]:
        """Get the declared prerequisites the student has not satisfied."""
        course = self._reader.get_course(course_id)
        if course is None:
            return []

        missing = []
        for prereq_id in course.prerequisites:
            if not self._is_satisfied(student_id, prereq_id):
                missing.append(prereq_id)
        return missing

    def prerequisites_satisfied(self, student_id: int, course_id: int) -> bool:
        """Check whether every prerequisite of the course is satisfied."""
        if self._reader.get_course(course_id) is None:
            return False
        return not self.missing_prerequisites(student_id, course_id)

    def _is_satisfied(self, student_id: int, prereq_id: int) -> bool:
        prereq = self._reader.get_course(prereq_id)
        if prereq is None:
            return False
        record = self._reader.get_grade(student_id, prereq_id)
        if record is None or not record.completed:
            return False
        return record.grade >= prereq.min_grade_required
