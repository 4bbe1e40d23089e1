"""Authentication input schemas for the TaskBri API."""
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, EmailStr, Field, ValidationError

from taskbri.errors import ValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)

PASSWORD_MIN_LENGTH = 6


class SignUpInput(BaseModel):
    """Sign up request body."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=256)
    avatar: Optional[str] = Field(None, max_length=1000)


class SignInInput(BaseModel):
    """Sign in request body."""
    email: str
    password: str


class PasswordChangeInput(BaseModel):
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=256)


class ForgetPasswordInput(BaseModel):
    """Password reset proven by the old password instead of a token."""
    email: str
    old_password: str
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=256)


def parse_input(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """Validate resolver arguments, raising ValidationFailed with the first problem."""
    try:
        return model(**data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationFailed(f"Invalid {field}: {first['msg']}")
