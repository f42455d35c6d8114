"""
Script to seed the registrar ledger with sample records via the REST API.
Make sure the server is running before executing this script.

Usage:
    REGISTRAR_ADMINS=registrar-office python -m registrar.main --rest-port 8000
    REGISTRAR_CALLER=registrar-office python seed_records.py
"""

import os
import sys

import requests


def _console_supports_utf8() -> bool:
    try:
        enc = getattr(sys.stdout, "encoding", None)
        return enc is not None and "utf" in enc.lower()
    except Exception:
        return False


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"

BASE_URL = os.environ.get("REGISTRAR_BASE_URL", "http://127.0.0.1:8000")
CALLER = os.environ.get("REGISTRAR_CALLER", "registrar-office")
HEADERS = {"X-Caller": CALLER}


def check_server():
    """Check if the server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=2)
        if response.status_code == 200:
            print(f"{_OK_CHAR} Server is running at {BASE_URL}")
            return True
    except requests.exceptions.RequestException:
        pass
    print(f"{_FAIL_CHAR} Server is not running at {BASE_URL}!")
    print("\nPlease start the server first:")
    print(f"  REGISTRAR_ADMINS={CALLER} python -m registrar.main --rest-port 8000")
    return False


def _post(path, data, label):
    try:
        response = requests.post(f"{BASE_URL}{path}", json=data, headers=HEADERS, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error creating {label}: {e}")
        return None
    if response.status_code == 201:
        result = response.json()
        print(f"{_OK_CHAR} {label} (tx {result['transaction_id']})")
        return result
    print(f"{_FAIL_CHAR} Failed to create {label}: {response.text}")
    return None


def create_course(course_id, name, credits, department, prerequisites=None, min_grade_required=60):
    """Create a new course."""
    return _post("/courses", {
        "course_id": course_id,
        "name": name,
        "credits": credits,
        "department": department,
        "prerequisites": prerequisites or [],
        "min_grade_required": min_grade_required,
    }, f"course {course_id} - {name}")


def create_student(student_id, name, enrollment_year, major):
    """Create a new student."""
    return _post("/students", {
        "student_id": student_id,
        "name": name,
        "enrollment_year": enrollment_year,
        "major": major,
    }, f"student {student_id} - {name}")


def record_grade(student_id, course_id, grade, semester, year, instructor):
    """Record a grade."""
    return _post("/grades", {
        "student_id": student_id,
        "course_id": course_id,
        "grade": grade,
        "semester": semester,
        "year": year,
        "instructor": instructor,
    }, f"grade {grade} for student {student_id} in course {course_id}")


def show_transcript(student_id):
    """Print a student's transcript."""
    response = requests.get(f"{BASE_URL}/students/{student_id}/transcript", timeout=5)
    transcript = response.json()
    student = transcript.get("student")
    if not student:
        print(f"{_FAIL_CHAR} Student {student_id} not found")
        return None

    record = transcript.get("academic_record") or {}
    print(f"\n{'='*60}")
    print(f"Transcript: {student['name']} ({student['student_id']}), {student['major']}")
    print(f"{'='*60}")
    for grade in transcript.get("grades", []):
        print(f"  course {grade['course_id']:6} | grade {grade['grade']:3} | "
              f"points {grade['grade_points']:2} | attempts {grade['attempts']}")
    gpa = record.get("cumulative_gpa", 0)
    print(f"  GPA {gpa // 100}.{gpa % 100:02d} | attempted {record.get('total_credits_attempted', 0)}"
          f" | earned {record.get('total_credits_earned', 0)}"
          f" | warnings {record.get('academic_warnings', 0)}")
    return transcript


def main():
    print("=" * 60)
    print("Registrar - Seed Sample Records")
    print("=" * 60)

    if not check_server():
        sys.exit(1)

    print("\nCreating courses...")
    create_course(101, "Introduction to Programming", 3, "Computer Science")
    create_course(201, "Data Structures", 3, "Computer Science", prerequisites=[101], min_grade_required=70)
    create_course(202, "Discrete Mathematics", 4, "Mathematics")
    create_course(301, "Algorithms", 3, "Computer Science", prerequisites=[201, 202])

    print("\nCreating students...")
    create_student(1001, "Ada Lovelace", 2022, "Computer Science")
    create_student(1002, "Alan Turing", 2023, "Mathematics")

    print("\nRecording grades...")
    record_grade(1001, 101, 95, 1, 2022, "Dr. Hopper")
    record_grade(1001, 201, 88, 2, 2023, "Dr. Knuth")
    record_grade(1001, 202, 91, 2, 2023, "Dr. Church")
    record_grade(1001, 301, 79, 1, 2024, "Dr. Dijkstra")
    record_grade(1002, 101, 58, 1, 2023, "Dr. Hopper")
    # Fails: 1002 has not passed 101 at the required grade
    record_grade(1002, 201, 90, 2, 2024, "Dr. Knuth")

    show_transcript(1001)
    show_transcript(1002)


if __name__ == "__main__":
    main()
