import re
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from models.user_model import Gender

BIRTH_PATTERN = re.compile(r"^\d{6}$")


def validate_birth(birth: Optional[str]) -> Optional[str]:
    """Accept an empty value or a six digit YYMMDD date with a plausible month and day."""
    if not birth:
        return None
    if not BIRTH_PATTERN.match(birth):
        raise ValueError("Birth date must be 6 digits (e.g. 920315)")
    month = int(birth[2:4])
    day = int(birth[4:6])
    if month < 1 or month > 12 or day < 1 or day > 31:
        raise ValueError("Please enter a valid birth date")
    return birth


class JoinForm(BaseModel):
    userId: str = Field(min_length=3, max_length=20, pattern=r"^[a-zA-Z0-9_-]+$")
    nickname: str = Field(min_length=2, max_length=20)
    email: EmailStr
    gender: Optional[Gender] = None
    birth: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("birth")
    @classmethod
    def check_birth(cls, value: Optional[str]) -> Optional[str]:
        return validate_birth(value)
