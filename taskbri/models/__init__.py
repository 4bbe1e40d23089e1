"""SQLModel tables backing the Users, Projects and TaskLists collections."""
from taskbri.models.project import Project
from taskbri.models.task_list import TaskList
from taskbri.models.user import User

__all__ = ["Project", "TaskList", "User"]
