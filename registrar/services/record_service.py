"""
Record service: the mutation state machine of the ledger.

Every mutating operation runs the same pipeline: authorization, input
bounds, existence, business rule, then one atomic write of the affected
rows together with its audit entry. The first failed check aborts the
operation with no state change and no audit entry.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..app_logger import get_logger
from ..core.context import CallContext
from ..core.entities import (
    AuditEntry, Course, CourseStatistics, GradeRecord, Student, StudentTranscript,
)
from ..core.enums import AuditAction, ErrorCode
from ..core.exceptions import (
    CourseExistsError, CourseNotFoundError, InvalidInputError,
    PrerequisiteNotMetError, RegistrarException, StudentExistsError,
    StudentNotFoundError,
)
from ..core.grading import grade_to_points, recompute_academic_record
from ..core.prerequisites import PrerequisiteChecker
from ..core import validation
from ..persistence.record_store import RecordStore, WriteSet
from .access_control import AccessControl
from .audit_log import AuditLog
from .concurrency_manager import (
    ADMINISTRATORS_RESOURCE, ConcurrencyManager, LockType,
    academic_record_resource, course_resource, grade_resource, student_resource,
)

logger = get_logger("records")


@dataclass
class OperationResult:
    """Result of a mutating operation."""
    success: bool
    message: str
    error_code: Optional[ErrorCode] = None
    transaction_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, entry: AuditEntry) -> 'OperationResult':
        return cls(success=True, message=entry.details, transaction_id=entry.transaction_id)

    @classmethod
    def failed(cls, error: RegistrarException) -> 'OperationResult':
        return cls(success=False, message=error.message,
                   error_code=error.error_code, details=dict(error.details))


class RecordService:
    """Owns the record store, the audit log and the administrator set."""

    def __init__(self, administrators: Iterable[str] = (),
                 store: Optional[RecordStore] = None,
                 audit_log: Optional[AuditLog] = None,
                 access_control: Optional[AccessControl] = None,
                 concurrency_manager: Optional[ConcurrencyManager] = None):
        self._store = store or RecordStore()
        self._audit_log = audit_log or AuditLog()
        self._access = access_control or AccessControl(administrators)
        self._concurrency_manager = concurrency_manager or ConcurrencyManager()
        self._prerequisites = PrerequisiteChecker(self._store)

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def audit_log(self) -> AuditLog:
        return self._audit_log

    @property
    def access_control(self) -> AccessControl:
        return self._access

    def _holder_id(self) -> str:
        return f"record_service_{threading.get_ident()}"

    def _execute(self, ctx: CallContext, operation: str,
                 apply: Callable[[], AuditEntry]) -> OperationResult:
        """Run one mutation and turn a precondition failure into a result."""
        try:
            entry = apply()
        except RegistrarException as e:
            logger.warning("%s rejected for %s: %s (%s)",
                           operation, ctx.caller, e.error_code.value, e.message)
            return OperationResult.failed(e)

        logger.info("%s committed as transaction %d by %s",
                    operation, entry.transaction_id, ctx.caller)
        return OperationResult.ok(entry)

    # Access control

    def is_administrator(self, principal: str) -> bool:
        return self._access.is_administrator(principal)

    def add_administrator(self, ctx: CallContext, new_admin: str) -> OperationResult:
        """Grant administrator rights to another principal."""
        def apply() -> AuditEntry:
            self._access.require_administrator(ctx.caller)
            self._access.validate_principal(ctx.caller, new_admin)

            with self._concurrency_manager.lock(ADMINISTRATORS_RESOURCE, LockType.WRITE,
                                                self._holder_id()):
                with self._store.locked():
                    self._access.grant(new_admin)
                    return self._audit_log.append(
                        ctx, AuditAction.ADD_ADMINISTRATOR, f"Added administrator {new_admin}")

        return self._execute(ctx, "add-administrator", apply)

    # Students

    def add_student(self, ctx: CallContext, student_id: int, name: str,
                    enrollment_year: int, major: str) -> OperationResult:
        """Register a new, active student."""
        def apply() -> AuditEntry:
            self._access.require_administrator(ctx.caller)
            validation.require_student_id(student_id)
            validation.require_name(name)
            validation.require_year(enrollment_year, "enrollment_year")
            validation.require_text(major, validation.MAX_MAJOR_LENGTH, "major")

            with self._concurrency_manager.lock(student_resource(student_id), LockType.WRITE,
                                                self._holder_id()):
                if self._store.has_student(student_id):
                    raise StudentExistsError(f"Student {student_id} already exists",
                                             details={'student_id': student_id})

                student = Student(
                    student_id=student_id,
                    name=name,
                    enrollment_year=enrollment_year,
                    major=major,
                )
                return self._store.commit(
                    WriteSet(students=[student]),
                    lambda: self._audit_log.append(
                        ctx, AuditAction.ADD_STUDENT, f"Added student {student_id} ({name})"))

        return self._execute(ctx, "add-student", apply)

    def update_student(self, ctx: CallContext, student_id: int, *,
                       active: Optional[bool] = None,
                       graduation_year: Optional[int] = None,
                       academic_standing: Optional[str] = None,
                       major: Optional[str] = None) -> OperationResult:
        """Change a student's status fields. Students are never deleted;
        deactivation is done here with ``active=False``."""
        def apply() -> AuditEntry:
            self._access.require_administrator(ctx.caller)
            validation.require_student_id(student_id)

            changes: Dict[str, Any] = {}
            if active is not None:
                if not isinstance(active, bool):
                    raise InvalidInputError("active must be a boolean", details={'active': active})
                changes['active'] = active
            if graduation_year is not None:
                changes['graduation_year'] = validation.require_year(graduation_year, "graduation_year")
            if academic_standing is not None:
                changes['academic_standing'] = validation.require_text(
                    academic_standing, validation.MAX_STANDING_LENGTH, "academic_standing")
            if major is not None:
                changes['major'] = validation.require_text(
                    major, validation.MAX_MAJOR_LENGTH, "major")
            if not changes:
                raise InvalidInputError("No student fields to update")

            with self._concurrency_manager.lock(student_resource(student_id), LockType.WRITE,
                                                self._holder_id()):
                student = self._store.get_student(student_id)
                if student is None:
                    raise StudentNotFoundError(f"Student {student_id} not found",
                                               details={'student_id': student_id})

                summary = ", ".join(f"{key}={value}" for key, value in sorted(changes.items()))
                return self._store.commit(
                    WriteSet(students=[student.update(**changes)]),
                    lambda: self._audit_log.append(
                        ctx, AuditAction.UPDATE_STUDENT,
                        f"Updated student {student_id}: {summary}"))

        return self._execute(ctx, "update-student", apply)

    # Courses

    def add_course(self, ctx: CallContext, course_id: int, name: str, credits: int,
                   department: str, prerequisites: Iterable[int] = (),
                   min_grade_required: int = 60, level: int = 100) -> OperationResult:
        """Register course reference data."""
        def apply() -> AuditEntry:
            self._access.require_administrator(ctx.caller)
            validation.require_course_id(course_id)
            validation.require_name(name)
            validation.require_credits(credits)
            validation.require_text(department, validation.MAX_DEPARTMENT_LENGTH, "department")
            prereqs = validation.require_prerequisites(prerequisites, course_id)
            validation.require_grade(min_grade_required, "min_grade_required")
            validation.require_level(level)

            with self._concurrency_manager.lock(course_resource(course_id), LockType.WRITE,
                                                self._holder_id()):
                if self._store.has_course(course_id):
                    raise CourseExistsError(f"Course {course_id} already exists",
                                            details={'course_id': course_id})

                course = Course(
                    course_id=course_id,
                    name=name,
                    credits=credits,
                    department=department,
                    prerequisites=prereqs,
                    min_grade_required=min_grade_required,
                    level=level,
                )
                return self._store.commit(
                    WriteSet(courses=[course]),
                    lambda: self._audit_log.append(
                        ctx, AuditAction.ADD_COURSE, f"Added course {course_id} ({name})"))

        return self._execute(ctx, "add-course", apply)

    # Grades

    def record_grade(self, ctx: CallContext, student_id: int, course_id: int, grade: int,
                     semester: int, year: int, instructor: str) -> OperationResult:
        """Record (or re-record) a student's grade for a course.

        Upserts the grade record, rebuilds the student's academic record and
        appends the audit entry while holding write locks on the student,
        the grade row and the academic record.
        """
        def apply() -> AuditEntry:
            self._access.require_administrator(ctx.caller)
            validation.require_student_id(student_id)
            validation.require_course_id(course_id)
            validation.require_grade(grade)
            validation.require_semester(semester)
            validation.require_year(year)
            validation.require_text(instructor, validation.MAX_INSTRUCTOR_LENGTH, "instructor")

            locks = {
                student_resource(student_id): LockType.WRITE,
                grade_resource(student_id, course_id): LockType.WRITE,
                academic_record_resource(student_id): LockType.WRITE,
                course_resource(course_id): LockType.READ,
            }
            with self._concurrency_manager.lock_many(locks, self._holder_id()):
                if not self._store.has_student(student_id):
                    raise StudentNotFoundError(f"Student {student_id} not found",
                                               details={'student_id': student_id})
                course = self._store.get_course(course_id)
                if course is None:
                    raise CourseNotFoundError(f"Course {course_id} not found",
                                              details={'course_id': course_id})

                missing = self._prerequisites.missing_prerequisites(student_id, course_id)
                if missing:
                    raise PrerequisiteNotMetError(
                        f"Student {student_id} has not satisfied prerequisites {missing} "
                        f"for course {course_id}",
                        details={'missing_prerequisites': missing})

                grade_record = self._upsert_grade(student_id, course_id, grade,
                                                  semester, year, instructor)
                academic_record = recompute_academic_record(
                    self._store.get_academic_record(student_id),
                    student_id,
                    course.credits,
                    grade,
                    self._completed_grades(student_id, grade_record),
                )

                details = (f"Recorded grade {grade} for student {student_id} in course {course_id} "
                           f"(attempt {grade_record.attempts})")
                return self._store.commit(
                    WriteSet(grades=[grade_record], academic_records=[academic_record]),
                    lambda: self._audit_log.append(ctx, AuditAction.RECORD_GRADE, details))

        return self._execute(ctx, "record-grade", apply)

    def _upsert_grade(self, student_id: int, course_id: int, grade: int,
                      semester: int, year: int, instructor: str) -> GradeRecord:
        points = grade_to_points(grade)
        existing = self._store.get_grade(student_id, course_id)
        if existing is not None:
            return existing.resubmit(grade, semester, year, instructor, points)
        return GradeRecord(
            student_id=student_id,
            course_id=course_id,
            grade=grade,
            semester=semester,
            year=year,
            instructor=instructor,
            grade_points=points,
        )

    def _completed_grades(self, student_id: int,
                          pending: GradeRecord) -> List[Tuple[GradeRecord, int]]:
        """Pair each of the student's grade records with its course credits,
        with ``pending`` standing in for the stored row it replaces."""
        records = [record for record in self._store.grades_for_student(student_id)
                   if record.course_id != pending.course_id]
        records.append(pending)
        return [(record, self._store.get_course(record.course_id).credits)
                for record in records if record.completed]

    # Queries

    def get_student_transcript(self, student_id: int) -> StudentTranscript:
        """Get a student with their academic record and grade records."""
        if not validation.is_valid_student_id(student_id):
            return StudentTranscript()

        locks = {
            student_resource(student_id): LockType.READ,
            academic_record_resource(student_id): LockType.READ,
        }
        with self._concurrency_manager.lock_many(locks, self._holder_id()):
            student = self._store.get_student(student_id)
            if student is None:
                return StudentTranscript()
            return StudentTranscript(
                student=student,
                academic_record=self._store.get_academic_record(student_id),
                grades=self._store.grades_for_student(student_id),
            )

    def get_course_statistics(self, course_id: int) -> Optional[CourseStatistics]:
        """Get a course with its active flag and prerequisites; None if unknown."""
        if not validation.is_valid_course_id(course_id):
            return None

        with self._concurrency_manager.lock(course_resource(course_id), LockType.READ,
                                            self._holder_id()):
            course = self._store.get_course(course_id)
        if course is None:
            return None
        return CourseStatistics(course=course, active=course.active,
                                prerequisites=list(course.prerequisites))

    def get_grade_record(self, student_id: int, course_id: int) -> Optional[GradeRecord]:
        with self._concurrency_manager.lock(grade_resource(student_id, course_id), LockType.READ,
                                            self._holder_id()):
            return self._store.get_grade(student_id, course_id)

    def get_audit_entry(self, transaction_id: int) -> Optional[AuditEntry]:
        with self._store.locked():
            return self._audit_log.get_entry(transaction_id)

    def get_statistics(self) -> Dict[str, Any]:
        """Get ledger statistics."""
        with self._store.locked():
            statistics: Dict[str, Any] = dict(self._store.counts())
            statistics['audit_entries'] = len(self._audit_log)
            statistics['administrators'] = len(self._access.administrators())
        return statistics
