"""SQLModel data models.

This module defines the application's database table using SQLModel.
"""

from typing import Optional
from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field


class Student(SQLModel, table=True):
    """A student record.

    Fields:
    - `name`: display name, 2-50 characters
    - `email`: contact address, unique regardless of letter case
    - `gender`: free-form, up to 20 characters

    Uniqueness of `email` is enforced by the store through a unique index
    on `lower(email)`, so two writers racing with the same address cannot
    both succeed.
    """
    __table_args__ = (
        Index("uq_student_email_lower", text("lower(email)"), unique=True),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=50, nullable=False)
    email: str = Field(max_length=100, nullable=False)
    gender: str = Field(max_length=20, nullable=False)
