from registrar.core.prerequisites import PrerequisiteChecker
from registrar.core.entities import Course, GradeRecord
from registrar.persistence.record_store import RecordStore, WriteSet


def _store(*courses, grades=()):
    store = RecordStore()
    store.commit(WriteSet(courses=list(courses), grades=list(grades)))
    return store


def _grade(course_id, grade, completed=True):
    return GradeRecord(student_id=1, course_id=course_id, grade=grade, semester=1, year=2024,
                       instructor="X", grade_points=0, completed=completed)


def test_no_prerequisites_is_satisfied():
    checker = PrerequisiteChecker(_store(Course(101, "Intro", 3, "CS")))
    assert checker.prerequisites_satisfied(1, 101)


def test_unknown_course_is_unsatisfied():
    checker = PrerequisiteChecker(_store())
    assert not checker.prerequisites_satisfied(1, 999)


def test_requires_prerequisite_min_grade():
    intro = Course(101, "Intro", 3, "CS", min_grade_required=70)
    advanced = Course(201, "Advanced", 3, "CS", prerequisites=(101,))

    assert not PrerequisiteChecker(_store(intro, advanced)).prerequisites_satisfied(1, 201)

    low = PrerequisiteChecker(_store(intro, advanced, grades=[_grade(101, 69)]))
    assert low.missing_prerequisites(1, 201) == [101]

    exact = PrerequisiteChecker(_store(intro, advanced, grades=[_grade(101, 70)]))
    assert exact.prerequisites_satisfied(1, 201)


def test_missing_prerequisite_course_data_is_unsatisfied():
    advanced = Course(201, "Advanced", 3, "CS", prerequisites=(101,))
    checker = PrerequisiteChecker(_store(advanced, grades=[_grade(101, 99)]))
    assert checker.missing_prerequisites(1, 201) == [101]


def test_check_is_single_level():
    base = Course(50, "Base", 3, "CS")
    intro = Course(101, "Intro", 3, "CS", prerequisites=(50,))
    advanced = Course(201, "Advanced", 3, "CS", prerequisites=(101,))
    checker = PrerequisiteChecker(_store(base, intro, advanced, grades=[_grade(101, 90)]))
    assert checker.prerequisites_satisfied(1, 201)


def test_reports_every_missing_prerequisite_in_declared_order():
    a = Course(101, "A", 3, "CS")
    b = Course(102, "B", 3, "CS")
    c = Course(103, "C", 3, "CS")
    target = Course(301, "Target", 3, "CS", prerequisites=(103, 101, 102))
    checker = PrerequisiteChecker(_store(a, b, c, target, grades=[_grade(101, 80)]))
    assert checker.missing_prerequisites(1, 301) == [103, 102]
