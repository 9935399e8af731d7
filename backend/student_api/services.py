"""Business logic services used by HTTP controllers.

`StudentService` enforces the rules that sit on top of the repository:
input trimming, email uniqueness (including on update, where a student
may keep its own address) and mapping missing records or conflicts to
`ServiceResult` values. Expected business failures are returned, never
raised; store failures propagate to the caller.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from sqlmodel import Session
from . import models, repositories
from .repositories import DuplicateEmailError

logger = logging.getLogger("student_api.services")


class FailureReason(str, Enum):
    """Why a service call did not succeed. The value is the client-facing message."""
    NOT_FOUND = "Student not found."
    EMAIL_EXISTS = "Email already exists."
    EMAIL_EXISTS_FOR_OTHER = "Email already exists for another student."

    @property
    def is_conflict(self) -> bool:
        return self is not FailureReason.NOT_FOUND


@dataclass
class ServiceResult:
    """Outcome of a mutating service call.

    `ok` tells success from failure; `error` carries the `FailureReason`
    on failure and `value` the payload (the created student) on success.
    """
    ok: bool
    error: Optional[FailureReason] = None
    value: Optional[models.Student] = None

    @classmethod
    def success(cls, value: Optional[models.Student] = None) -> "ServiceResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: FailureReason) -> "ServiceResult":
        return cls(ok=False, error=reason)


class StudentService:
    """Create, read, update and delete students."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.StudentRepository(session)

    def list_paged(self, name: Optional[str] = None, page: Optional[int] = None, page_size: Optional[int] = None) -> dict:
        """Return one page of students together with the total match count.

        `page` defaults to 1 and `page_size` to the number of returned
        items, so an unpaged request reports its real size.
        """
        items = self.repo.list(name, page, page_size)
        total = self.repo.count(name)
        return {
            'items': items,
            'total_count': total,
            'page': page if page is not None else 1,
            'page_size': page_size if page_size is not None else len(items),
        }

    def get(self, student_id: int) -> Optional[models.Student]:
        return self.repo.get(student_id)

    def create(self, data) -> ServiceResult:
        """Create a student from `data` (any object with name/email/gender).

        Fields are trimmed before the uniqueness check and persistence.
        A write rejected by the unique email index is reported the same
        way as a failed pre-check.
        """
        student = models.Student(
            name=data.name.strip(),
            email=data.email.strip(),
            gender=data.gender.strip(),
        )
        if self.repo.exists_by_email(student.email):
            logger.info("create rejected, email in use")
            return ServiceResult.failure(FailureReason.EMAIL_EXISTS)
        try:
            created = self.repo.add(student)
        except DuplicateEmailError:
            logger.info("create rejected by unique email index")
            return ServiceResult.failure(FailureReason.EMAIL_EXISTS)
        logger.info("created student id=%s", created.id)
        return ServiceResult.success(created)

    def update(self, student_id: int, data) -> ServiceResult:
        """Fully replace name, email and gender of student `student_id`.

        Existence is checked before the email so a missing student is
        always reported as not found.
        """
        if not self.repo.exists_by_id(student_id):
            return ServiceResult.failure(FailureReason.NOT_FOUND)
        student = models.Student(
            id=student_id,
            name=data.name.strip(),
            email=data.email.strip(),
            gender=data.gender.strip(),
        )
        if self.repo.exists_by_email(student.email, exclude_id=student_id):
            logger.info("update of id=%s rejected, email in use", student_id)
            return ServiceResult.failure(FailureReason.EMAIL_EXISTS_FOR_OTHER)
        try:
            self.repo.update(student)
        except DuplicateEmailError:
            logger.info("update of id=%s rejected by unique email index", student_id)
            return ServiceResult.failure(FailureReason.EMAIL_EXISTS_FOR_OTHER)
        logger.info("updated student id=%s", student_id)
        return ServiceResult.success()

    def delete(self, student_id: int) -> ServiceResult:
        if not self.repo.delete(student_id):
            return ServiceResult.failure(FailureReason.NOT_FOUND)
        logger.info("deleted student id=%s", student_id)
        return ServiceResult.success()

    def delete_all(self) -> int:
        removed = self.repo.delete_all()
        logger.info("deleted all students, count=%s", removed)
        return removed
