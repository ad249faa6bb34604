from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from profiles_api.models import Gender


def normalize_gender(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


class SignUpIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str
    name: str = Field(min_length=1, max_length=50)
    age: int = Field(ge=0, le=150)
    gender: Gender
    profile_image: Optional[str] = Field(default=None, alias="profileImage", max_length=1024)

    @field_validator("gender", mode="before")
    @classmethod
    def upper_gender(cls, value):
        return normalize_gender(value)


class SignInIn(BaseModel):
    # Any credential miss is a 401 from authenticate(), not a 422 here
    email: str
    password: str


class MessageOut(BaseModel):
    message: str
