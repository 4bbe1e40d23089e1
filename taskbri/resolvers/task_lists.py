"""Task list resolvers."""
import logging

from ariadne import MutationType, ObjectType

from taskbri.errors import NotFound
from taskbri.middleware.auth import require_identity, require_membership
from taskbri.models.task_list import TaskList
from taskbri.resolvers.loaders import forget, load_project
from taskbri.resolvers.projects import get_member_project

logger = logging.getLogger(__name__)

mutation = MutationType()
task_list_type = ObjectType("TaskList")


@mutation.field("createTaskList")
async def resolve_create_task_list(_, info, content, project_id):
    identity = require_identity(info)
    repository = info.context["repository"]
    project = await get_member_project(repository, project_id, identity)

    task_list = TaskList(content=content, is_completed=False, project_id=project.id)
    await repository.task_lists.insert_one(task_list)
    forget(info, ("task_lists", str(project.id)))
    return task_list


@mutation.field("updateTaskList")
async def resolve_update_task_list(_, info, id, content=None, is_completed=None):
    identity = require_identity(info)
    repository = info.context["repository"]

    task_list = await repository.task_lists.find_by_id(id)
    if task_list is None:
        raise NotFound("Task not found")

    # Orphans (project already gone) are open to anyone signed in, as for delete
    project = await repository.projects.find_by_id(task_list.project_id)
    if project is not None:
        require_membership(project, identity)

    patch = {}
    if content is not None:
        patch["content"] = content
    if is_completed is not None:
        patch["is_completed"] = is_completed
    if patch:
        await repository.task_lists.update_one(task_list.id, patch)
        forget(info, ("task_lists", str(task_list.project_id)))

    updated = await repository.task_lists.find_by_id(task_list.id)
    if updated is None:
        raise NotFound("Task not found")
    return updated


@mutation.field("deleteTaskList")
async def resolve_delete_task_list(_, info, id):
    identity = require_identity(info)
    repository = info.context["repository"]

    task_list = await repository.task_lists.find_by_id(id)
    if task_list is None:
        return True

    # Same orphan rule as updateTaskList
    project = await repository.projects.find_by_id(task_list.project_id)
    if project is not None:
        require_membership(project, identity)

    await repository.task_lists.delete_one(task_list.id)
    forget(info, ("task_lists", str(task_list.project_id)))
    return True


@mutation.field("deleteAllTasks")
async def resolve_delete_all_tasks(_, info, project_id):
    identity = require_identity(info)
    repository = info.context["repository"]

    project = await repository.projects.find_by_id(project_id)
    if project is not None:
        require_membership(project, identity)

    deleted = await repository.task_lists.delete_many(project_id=project_id)
    forget(info, ("task_lists", str(project.id if project else project_id)))
    logger.info(f"User {identity.id} deleted {deleted} task(s) of project {project_id}")
    return True


@task_list_type.field("id")
def resolve_task_list_id(task_list: TaskList, info):
    return str(task_list.id)


@task_list_type.field("projectId")
def resolve_task_list_project_id(task_list: TaskList, info):
    return str(task_list.project_id)


@task_list_type.field("project")
async def resolve_task_list_project(task_list: TaskList, info):
    return await load_project(info, task_list.project_id)
