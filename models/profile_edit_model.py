from pydantic import BaseModel, Field, field_validator
from typing import Optional

from models.join_form_model import validate_birth
from models.user_model import Gender, LibraryVisibility


class ProfileEditForm(BaseModel):
    nickname: str = Field(min_length=2, max_length=20)
    gender: Optional[Gender] = None
    birth: Optional[str] = None
    bio: Optional[str] = None
    libraryVisibility: Optional[LibraryVisibility] = None

    @field_validator("birth")
    @classmethod
    def check_birth(cls, value: Optional[str]) -> Optional[str]:
        return validate_birth(value)
