"""Project model for SQLModel."""
from datetime import datetime, timezone
from typing import List
import uuid

from sqlalchemy import JSON, Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

# JSONB on PostgreSQL so membership can use the @> operator
USER_IDS_COLUMN_TYPE = JSON().with_variant(JSONB(), "postgresql")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class Project(SQLModel, table=True):
    """A unit of collaborative work. Progress is derived from its task lists."""

    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    created_at: str = Field(default_factory=utc_timestamp)
    title: str = Field(min_length=1, max_length=200)
    # Ordered member ids as strings; the creator is always first
    user_ids: List[str] = Field(
        default_factory=list,
        sa_column=Column(USER_IDS_COLUMN_TYPE, nullable=False),
    )

    def has_member(self, user_id) -> bool:
        return str(user_id) in self.user_ids
