"""TaskList model for SQLModel (a single task item inside a project)."""
import uuid

from sqlmodel import Field, SQLModel


class TaskList(SQLModel, table=True):
    """Task item. project_id is a reference the store does not enforce."""

    __tablename__ = "task_lists"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    content: str = Field(max_length=1000)
    is_completed: bool = Field(default=False)
    project_id: uuid.UUID = Field(index=True)
