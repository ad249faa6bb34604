from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profiles_api.models import Gender
from profiles_api.schemas.auth import normalize_gender


class ProfileOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    name: str
    age: int
    gender: Gender
    profile_image: Optional[str] = Field(default=None, alias="profileImage")


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    email: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    profile: ProfileOut


class UserEnvelope(BaseModel):
    data: UserOut


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile. Anything else is rejected."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    gender: Optional[Gender] = None
    profile_image: Optional[str] = Field(default=None, alias="profileImage", max_length=1024)

    @field_validator("gender", mode="before")
    @classmethod
    def upper_gender(cls, value):
        return normalize_gender(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)
