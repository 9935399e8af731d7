"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests. Incoming text is stripped of surrounding
whitespace before the length and email checks run.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List

EMAIL_MAX_LENGTH = 100


class StudentIn(BaseModel):
    """Payload for creating or fully replacing a student."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=50)
    email: str
    gender: str = Field(min_length=1, max_length=20)

    @field_validator('email')
    @classmethod
    def email_address(cls, v: str) -> str:
        """Check length and address syntax; the address is kept exactly as sent."""
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f'email must be at most {EMAIL_MAX_LENGTH} characters')
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f'value is not a valid email address: {exc}') from exc
        return v


class StudentOut(BaseModel):
    """A stored student as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    gender: str


class StudentPage(BaseModel):
    """One page of students; serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    items: List[StudentOut]
    total_count: int
    page: int
    page_size: int


class MessageOut(BaseModel):
    """Confirmation or error message body."""
    message: str
