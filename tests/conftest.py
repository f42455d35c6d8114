import pytest

from registrar.core.context import CallContext, LogicalClock
from registrar.services.record_service import RecordService

ADMIN = "registrar-office"
OUTSIDER = "student-portal"


@pytest.fixture
def clock() -> LogicalClock:
    return LogicalClock()


@pytest.fixture
def admin(clock):
    """Build a fresh admin call context per call, ticking the clock."""
    def make() -> CallContext:
        return clock.context_for(ADMIN)
    return make


@pytest.fixture
def outsider(clock):
    def make() -> CallContext:
        return clock.context_for(OUTSIDER)
    return make


@pytest.fixture
def service() -> RecordService:
    return RecordService(administrators=[ADMIN])


@pytest.fixture
def seeded(service, admin) -> RecordService:
    """Student 1001 plus courses 201 (3 credits) and 202 (4 credits)."""
    assert service.add_student(admin(), 1001, "Ada", 2022, "CS").success
    assert service.add_course(admin(), 201, "Algorithms", 3, "CS").success
    assert service.add_course(admin(), 202, "Compilers", 4, "CS").success
    return service
