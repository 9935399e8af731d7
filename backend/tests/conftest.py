import os

# Point the app at an in-memory database before any `student_api` import reads settings.
os.environ["ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlmodel import Session

from student_api.database import engine, create_db_and_tables, drop_db_and_tables
from student_api.models import Student


@pytest.fixture(autouse=True)
def reset_db():
    """Give every test an empty `student` table."""
    drop_db_and_tables()
    create_db_and_tables()
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def seed(session):
    """Insert students by name; emails are derived from the names."""
    def _seed(*names, gender="Male"):
        rows = [Student(name=n, email=f"{n.lower()}@example.com", gender=gender) for n in names]
        session.add_all(rows)
        session.commit()
        for r in rows:
            session.refresh(r)
        return rows
    return _seed
