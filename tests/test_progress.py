import uuid

from taskbri.models.task_list import TaskList
from taskbri.utils.progress import compute_progress


def make_tasks(total, completed):
    project_id = uuid.uuid4()
    return [
        TaskList(content=f"task {i}", is_completed=i < completed, project_id=project_id)
        for i in range(total)
    ]


def test_no_task_lists_is_zero():
    assert compute_progress([]) == 0


def test_one_of_four_completed():
    assert compute_progress(make_tasks(4, 1)) == 25.0


def test_fraction_is_not_truncated():
    assert compute_progress(make_tasks(3, 1)) == 100 / 3


def test_all_completed():
    assert compute_progress(make_tasks(2, 2)) == 100.0
