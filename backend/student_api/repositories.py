"""Repository classes encapsulating database operations.

The repository translates query intent (filters, paging, CRUD) into
statements against the `student` table and returns SQLModel objects.
It holds no business rules: callers decide whether a record should
exist before updating it or whether an email is free before writing.
"""

import logging
from typing import List, Optional
from sqlmodel import Session, select
from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from . import models

logger = logging.getLogger("student_api.repositories")


class DuplicateEmailError(Exception):
    """Raised when the store rejects a write because the email is taken."""


class StudentRepository:
    """CRUD operations for `Student` objects."""
    def __init__(self, session: Session):
        self.session = session

    def _filtered(self, stmt, name: Optional[str]):
        """Apply the case-insensitive name filter shared by `list` and `count`."""
        term = name.strip().lower() if name else ""
        if term:
            stmt = stmt.where(func.lower(models.Student.name).contains(term, autoescape=True))
        return stmt

    def list(self, name: Optional[str] = None, page: Optional[int] = None, page_size: Optional[int] = None) -> List[models.Student]:
        """Return students ordered by name, optionally filtered and paged.

        Paging is applied only when both `page` and `page_size` are
        positive; otherwise the whole filtered set is returned.
        """
        stmt = self._filtered(select(models.Student), name)
        stmt = stmt.order_by(models.Student.name, models.Student.id)
        if page is not None and page_size is not None and page > 0 and page_size > 0:
            stmt = stmt.offset((page - 1) * page_size).limit(page_size)
        return list(self.session.exec(stmt).all())

    def count(self, name: Optional[str] = None) -> int:
        """Count students matching the same filter as `list`, ignoring paging."""
        stmt = self._filtered(select(func.count()).select_from(models.Student), name)
        return self.session.exec(stmt).one()

    def get(self, student_id: int) -> Optional[models.Student]:
        """Get a `Student` by primary key."""
        return self.session.get(models.Student, student_id)

    def exists_by_id(self, student_id: int) -> bool:
        stmt = select(models.Student.id).where(models.Student.id == student_id)
        return self.session.exec(stmt).first() is not None

    def exists_by_email(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """Return True if another row already uses `email`.

        The comparison ignores surrounding whitespace and letter case.
        When `exclude_id` is given, the row with that id does not count,
        which lets an update keep its own address.
        """
        normalized = email.strip().lower()
        stmt = select(models.Student.id).where(func.lower(models.Student.email) == normalized)
        if exclude_id is not None:
            stmt = stmt.where(models.Student.id != exclude_id)
        return self.session.exec(stmt).first() is not None

    def add(self, student: models.Student) -> models.Student:
        """Persist a new student and return the managed instance with its id."""
        self.session.add(student)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEmailError(student.email) from exc
        self.session.refresh(student)
        return student

    def update(self, student: models.Student) -> None:
        """Replace name, email and gender of the row with `student.id`.

        Nothing happens when no such row exists.
        """
        stmt = (
            update(models.Student)
            .where(models.Student.id == student.id)
            .values(name=student.name, email=student.email, gender=student.gender)
        )
        try:
            self.session.exec(stmt)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEmailError(student.email) from exc

    def delete(self, student_id: int) -> bool:
        """Delete the student with `student_id`; return False if it did not exist."""
        student = self.session.get(models.Student, student_id)
        if student is None:
            return False
        self.session.delete(student)
        self.session.commit()
        return True

    def delete_all(self) -> int:
        """Delete every student and return how many rows were removed."""
        result = self.session.exec(delete(models.Student))
        self.session.commit()
        removed = result.rowcount
        logger.debug("deleted %s student rows", removed)
        return removed
