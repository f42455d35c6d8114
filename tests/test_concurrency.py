import threading
import time

from registrar.core.context import LogicalClock
from registrar.core.grading import calculate_gpa
from registrar.services.concurrency_manager import ConcurrencyManager, LockType
from registrar.services.record_service import RecordService

ADMIN = "registrar-office"


def test_read_locks_are_shared_and_write_locks_are_exclusive():
    manager = ConcurrencyManager()
    first = manager.acquire_lock("student:1", LockType.READ, "a")
    second = manager.acquire_lock("student:1", LockType.READ, "b")
    assert len(manager.get_lock_info("student:1")) == 2

    acquired = threading.Event()

    def writer():
        with manager.lock("student:1", LockType.WRITE, "c"):
            acquired.set()

    thread = threading.Thread(target=writer)
    thread.start()
    time.sleep(0.05)
    assert not acquired.is_set()

    manager.release_lock(first)
    manager.release_lock(second)
    thread.join(timeout=2)
    assert acquired.is_set()
    assert manager.get_lock_info("student:1") == []


def test_same_holder_can_stack_locks():
    manager = ConcurrencyManager()
    with manager.lock_many({"a": LockType.WRITE, "b": LockType.READ}, "holder"):
        with manager.lock("a", LockType.READ, "holder"):
            assert len(manager.get_holder_locks("holder")) == 3
    assert manager.get_holder_locks("holder") == []


def test_release_unknown_lock():
    assert not ConcurrencyManager().release_lock("missing")


def test_concurrent_grade_submissions_are_serialized():
    clock = LogicalClock()
    service = RecordService(administrators=[ADMIN])
    service.add_student(clock.context_for(ADMIN), 1001, "Ada", 2022, "CS")
    service.add_course(clock.context_for(ADMIN), 201, "Algorithms", 3, "CS")
    service.add_course(clock.context_for(ADMIN), 202, "Compilers", 4, "CS")

    grades = [(201 if i % 2 else 202, 40 + i) for i in range(40)]

    def submit(course_id, grade):
        service.record_grade(clock.context_for(ADMIN), 1001, course_id, grade, 1, 2024, "X")

    threads = [threading.Thread(target=submit, args=args) for args in grades]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    attempted = sum(3 if course_id == 201 else 4 for course_id, _ in grades)
    earned = sum(3 if course_id == 201 else 4 for course_id, grade in grades if grade >= 60)
    record = service.get_student_transcript(1001).academic_record

    assert record.total_credits_attempted == attempted
    assert record.total_credits_earned == earned
    assert record.academic_warnings == sum(1 for _, grade in grades if grade < 60)
    assert service.get_grade_record(1001, 201).attempts == 20
    assert service.get_grade_record(1001, 202).attempts == 20
    assert record.cumulative_gpa == calculate_gpa(
        (g.grade_points, service.store.get_course(g.course_id).credits)
        for g in service.store.grades_for_student(1001))

    ids = [entry.transaction_id for entry in service.audit_log.entries()]
    assert ids == list(range(3 + len(grades)))


def test_readers_never_see_rows_without_their_audit_entry(monkeypatch):
    clock = LogicalClock()
    service = RecordService(administrators=[ADMIN])
    appending = threading.Event()
    release = threading.Event()
    append = service.audit_log.append

    def paused_append(*args, **kwargs):
        appending.set()
        release.wait(5)
        return append(*args, **kwargs)

    monkeypatch.setattr(service.audit_log, "append", paused_append)

    writer = threading.Thread(
        target=service.add_student,
        args=(clock.context_for(ADMIN), 1001, "Ada", 2022, "CS"))
    writer.start()
    assert appending.wait(5)

    seen = []
    reader = threading.Thread(target=lambda: seen.append(service.get_statistics()))
    reader.start()
    reader.join(0.2)
    assert reader.is_alive()

    release.set()
    writer.join(5)
    reader.join(5)

    assert seen[0]['students'] == 1
    assert seen[0]['audit_entries'] == 1
    assert service.get_audit_entry(0).action.value == "add-student"
