"""CLI script to seed a few demo students into the backend DB.
Usage: python scripts/seed_students.py [--reset]
"""
import sys
import argparse
import pathlib
# Ensure `backend/` is on sys.path so `student_api` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from types import SimpleNamespace
from sqlmodel import Session
from student_api.database import engine, create_db_and_tables
from student_api import services

DEMO_STUDENTS = [
    ("Alice Nguyen", "alice@example.com", "Female"),
    ("Bob Tran", "bob@example.com", "Male"),
    ("John Le", "john@example.com", "Male"),
    ("Johnny Pham", "johnny@example.com", "Male"),
    ("Zoe Vo", "zoe@example.com", "Female"),
]


def main(reset: bool = False):
    """Create tables and insert the demo students through `StudentService`.

    Students whose email is already taken are reported and skipped, so
    running the script twice is harmless.
    """
    create_db_and_tables()
    with Session(engine) as session:
        svc = services.StudentService(session)
        if reset:
            print(f'Removed {svc.delete_all()} existing students')
        for name, email, gender in DEMO_STUDENTS:
            result = svc.create(SimpleNamespace(name=name, email=email, gender=gender))
            if result.ok:
                print(f'Created {result.value.id}: {name} <{email}>')
            else:
                print(f'Skipped {name} <{email}>: {result.error.value}')

if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--reset', action='store_true', help='Delete all students before seeding')
    args = parser.parse_args()
    main(reset=args.reset)
