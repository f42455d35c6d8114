"""
REST host adapter for the registrar ledger using FastAPI.

The adapter plays the host's part: it takes the caller identity from the
``X-Caller`` header and stamps each mutating request with the next value of
a logical clock. Bounds checking is left to the ledger's validation layer.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Header, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from ..core.context import LogicalClock
from ..core.enums import ErrorCode
from ..core.grading import letter_grade
from ..services.record_service import OperationResult, RecordService

_STATUS_BY_ERROR = {
    ErrorCode.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.STUDENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.COURSE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STUDENT_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.COURSE_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.PREREQUISITE_NOT_MET: 422,
}


# Pydantic models for API. Strict: a JSON boolean is not an integer.
class StudentCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    student_id: int
    name: str
    enrollment_year: int
    major: str


class StudentUpdate(BaseModel):
    model_config = ConfigDict(strict=True)

    active: Optional[bool] = None
    graduation_year: Optional[int] = None
    academic_standing: Optional[str] = None
    major: Optional[str] = None


class CourseCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    course_id: int
    name: str
    credits: int
    department: str
    prerequisites: List[int] = Field(default_factory=list)
    min_grade_required: int = 60
    level: int = 100


class GradeSubmission(BaseModel):
    model_config = ConfigDict(strict=True)

    student_id: int
    course_id: int
    grade: int
    semester: int
    year: int
    instructor: str


class AdministratorCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    principal: str


class OperationResponse(BaseModel):
    success: bool
    message: str
    transaction_id: Optional[int] = None


class TranscriptResponse(BaseModel):
    student: Optional[Dict[str, Any]] = None
    academic_record: Optional[Dict[str, Any]] = None
    grades: List[Dict[str, Any]] = []


class CourseStatisticsResponse(BaseModel):
    course: Dict[str, Any]
    active: bool
    prerequisites: List[int]


class AuditEntryResponse(BaseModel):
    transaction_id: int
    timestamp: int
    action: str
    principal: str
    details: str


class RegistrarRestAPI:
    """REST API exposing the ledger operations and queries."""

    def __init__(self, record_service: RecordService, clock: Optional[LogicalClock] = None):
        self._records = record_service
        self._clock = clock or LogicalClock()

        self.app = FastAPI(
            title="Registrar Academic Records API",
            description="Authoritative ledger of students, courses, grades and audit history",
            version="1.0.0",
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._setup_routes()

    @property
    def clock(self) -> LogicalClock:
        return self._clock

    def _respond(self, result: OperationResult) -> OperationResponse:
        """Convert an operation result, raising for a rejected operation."""
        if not result.success:
            status_code = _STATUS_BY_ERROR.get(result.error_code, status.HTTP_400_BAD_REQUEST)
            raise HTTPException(status_code=status_code, detail={
                "error_code": result.error_code.value,
                "message": result.message,
                "details": result.details,
            })
        return OperationResponse(success=True, message=result.message,
                                 transaction_id=result.transaction_id)

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/health", response_model=Dict[str, str])
        def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        @self.app.get("/statistics", response_model=Dict[str, int])
        def get_statistics():
            """Get ledger statistics."""
            return self._records.get_statistics()

        # Mutating endpoints
        @self.app.post("/students", response_model=OperationResponse,
                       status_code=status.HTTP_201_CREATED)
        def add_student(student_data: StudentCreate, x_caller: str = Header(...)):
            """Register a student."""
            ctx = self._clock.context_for(x_caller)
            return self._respond(self._records.add_student(
                ctx,
                student_data.student_id,
                student_data.name,
                student_data.enrollment_year,
                student_data.major,
            ))

        @self.app.patch("/students/{student_id}", response_model=OperationResponse)
        def update_student(student_id: int, update_data: StudentUpdate,
                           x_caller: str = Header(...)):
            """Update a student's status fields."""
            ctx = self._clock.context_for(x_caller)
            return self._respond(self._records.update_student(
                ctx,
                student_id,
                active=update_data.active,
                graduation_year=update_data.graduation_year,
                academic_standing=update_data.academic_standing,
                major=update_data.major,
            ))

        @self.app.post("/courses", response_model=OperationResponse,
                       status_code=status.HTTP_201_CREATED)
        def add_course(course_data: CourseCreate, x_caller: str = Header(...)):
            """Register a course."""
            ctx = self._clock.context_for(x_caller)
            return self._respond(self._records.add_course(
                ctx,
                course_data.course_id,
                course_data.name,
                course_data.credits,
                course_data.department,
                prerequisites=course_data.prerequisites,
                min_grade_required=course_data.min_grade_required,
                level=course_data.level,
            ))

        @self.app.post("/grades", response_model=OperationResponse,
                       status_code=status.HTTP_201_CREATED)
        def record_grade(submission: GradeSubmission, x_caller: str = Header(...)):
            """Record a grade."""
            ctx = self._clock.context_for(x_caller)
            return self._respond(self._records.record_grade(
                ctx,
                submission.student_id,
                submission.course_id,
                submission.grade,
                submission.semester,
                submission.year,
                submission.instructor,
            ))

        @self.app.post("/administrators", response_model=OperationResponse,
                       status_code=status.HTTP_201_CREATED)
        def add_administrator(admin_data: AdministratorCreate, x_caller: str = Header(...)):
            """Grant administrator rights."""
            ctx = self._clock.context_for(x_caller)
            return self._respond(self._records.add_administrator(ctx, admin_data.principal))

        # Queries
        @self.app.get("/students/{student_id}/transcript", response_model=TranscriptResponse)
        def get_student_transcript(student_id: int):
            """Get a student's transcript; both parts are empty if unknown."""
            transcript = self._records.get_student_transcript(student_id).to_dict()
            for grade in transcript["grades"]:
                grade["letter_grade"] = letter_grade(grade["grade"])
            return TranscriptResponse(**transcript)

        @self.app.get("/courses/{course_id}/statistics", response_model=CourseStatisticsResponse)
        def get_course_statistics(course_id: int):
            """Get a course's statistics."""
            statistics = self._records.get_course_statistics(course_id)
            if statistics is None:
                raise HTTPException(status_code=404, detail="Course not found")
            return CourseStatisticsResponse(**statistics.to_dict())

        @self.app.get("/audit/{transaction_id}", response_model=AuditEntryResponse)
        def get_audit_entry(transaction_id: int):
            """Get an audit entry by transaction id."""
            entry = self._records.get_audit_entry(transaction_id)
            if entry is None:
                raise HTTPException(status_code=404, detail="Audit entry not found")
            return AuditEntryResponse(**entry.to_dict())
