#!/usr/bin/env python3
"""
Demo scenario for the registrar ledger.
"""

import os
import sys
import threading

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from registrar.config import RegistrarSettings
from registrar.core.grading import format_gpa
from registrar.main import RegistrarPlatform

ADMIN = "registrar-office"


def run_demo():
    """Run a walk-through of the ledger's state machine."""
    print("=" * 60)
    print("REGISTRAR ACADEMIC RECORDS LEDGER - DEMO")
    print("=" * 60)

    platform = RegistrarPlatform(RegistrarSettings(admins=[ADMIN]))

    print("\n1. Creating reference data...")
    create_sample_data(platform)

    print("\n2. Recording grades...")
    demonstrate_grading(platform)

    print("\n3. Demonstrating the prerequisite gate...")
    demonstrate_prerequisites(platform)

    print("\n4. Demonstrating access control...")
    demonstrate_access_control(platform)

    print("\n5. Demonstrating concurrent submissions...")
    demonstrate_concurrency(platform)

    print("\n6. Audit trail...")
    show_audit_log(platform)

    print("\n" + "=" * 60)
    print("DEMO COMPLETED")
    print("=" * 60)


def _ctx(platform, caller=ADMIN):
    return platform.clock.context_for(caller)


def _show(label, result):
    if result.success:
        print(f"  ✓ {label}: tx {result.transaction_id}")
    else:
        print(f"  ✗ {label}: {result.error_code.value} - {result.message}")


def create_sample_data(platform):
    records = platform.record_service
    _show("course 101", records.add_course(_ctx(platform), 101, "Intro to Programming", 3, "CS"))
    _show("course 201", records.add_course(_ctx(platform), 201, "Data Structures", 3, "CS",
                                           prerequisites=[101], min_grade_required=70))
    _show("course 202", records.add_course(_ctx(platform), 202, "Discrete Math", 4, "Math"))
    for student_id, name in [(1001, "Ada"), (1002, "Alan"), (1003, "Grace")]:
        _show(f"student {student_id}",
              records.add_student(_ctx(platform), student_id, name, 2022, "Computer Science"))


def demonstrate_grading(platform):
    records = platform.record_service
    _show("1001 / 101 = 95", records.record_grade(_ctx(platform), 1001, 101, 95, 1, 2022, "Hopper"))
    _show("1001 / 202 = 55", records.record_grade(_ctx(platform), 1001, 202, 55, 1, 2022, "Church"))
    _show("1001 / 202 = 81 (retake)",
          records.record_grade(_ctx(platform), 1001, 202, 81, 2, 2023, "Church"))
    print_transcript(platform, 1001)


def demonstrate_prerequisites(platform):
    records = platform.record_service
    _show("1002 / 201 without 101",
          records.record_grade(_ctx(platform), 1002, 201, 90, 1, 2023, "Knuth"))
    _show("1002 / 101 = 65", records.record_grade(_ctx(platform), 1002, 101, 65, 1, 2023, "Hopper"))
    _show("1002 / 201 with 101 below 70",
          records.record_grade(_ctx(platform), 1002, 201, 90, 2, 2023, "Knuth"))
    _show("1001 / 201", records.record_grade(_ctx(platform), 1001, 201, 88, 2, 2023, "Knuth"))


def demonstrate_access_control(platform):
    records = platform.record_service
    _show("outsider adds student",
          records.add_student(_ctx(platform, "outsider"), 1004, "Eve", 2023, "CS"))
    _show("admin adds itself", records.add_administrator(_ctx(platform), ADMIN))
    _show("admin adds dean", records.add_administrator(_ctx(platform), "dean"))
    _show("dean adds student",
          records.add_student(_ctx(platform, "dean"), 1004, "Eve", 2023, "CS"))


def demonstrate_concurrency(platform):
    records = platform.record_service
    results = []

    def submit(grade):
        results.append(records.record_grade(_ctx(platform), 1003, 101, grade, 1, 2024, "Hopper"))

    threads = [threading.Thread(target=submit, args=(60 + i,)) for i in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    grade = records.get_grade_record(1003, 101)
    print(f"  {sum(r.success for r in results)} submissions committed, attempts = {grade.attempts}")
    print_transcript(platform, 1003)


def print_transcript(platform, student_id):
    transcript = platform.record_service.get_student_transcript(student_id)
    record = transcript.academic_record
    print(f"  {transcript.student.name}: GPA {format_gpa(record.cumulative_gpa)}, "
          f"attempted {record.total_credits_attempted}, earned {record.total_credits_earned}, "
          f"warnings {record.academic_warnings}")


def show_audit_log(platform):
    for entry in platform.record_service.audit_log.entries():
        print(f"  tx {entry.transaction_id:3} @{entry.timestamp:3} "
              f"{entry.action.value:18} {entry.principal:16} {entry.details}")


if __name__ == "__main__":
    run_demo()
