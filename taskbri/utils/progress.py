from typing import Iterable

from taskbri.models.task_list import TaskList


def compute_progress(task_lists: Iterable[TaskList]) -> float:
    """Percentage of completed task lists, 0.0 when there are none."""
    task_lists = list(task_lists)
    if not task_lists:
        return 0.0
    completed = sum(1 for task_list in task_lists if task_list.is_completed)
    return 100 * completed / len(task_lists)
