"""User model for SQLModel."""
from datetime import datetime, timezone
from typing import Optional
import uuid

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """User entity for authentication and project membership."""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password: str = Field(max_length=255)  # pbkdf2 hash, never the plaintext
    avatar: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
