"""Project resolvers: membership-scoped listing, CRUD, collaborators and derived fields."""
import asyncio
import logging

from ariadne import MutationType, ObjectType, QueryType

from taskbri.db.repository import Repository, parse_id
from taskbri.errors import NotFound, SelfRemovalForbidden, UserNotFound, ValidationFailed
from taskbri.middleware.auth import require_identity, require_membership
from taskbri.models.project import Project
from taskbri.models.user import User
from taskbri.resolvers.loaders import forget, load_task_lists, load_user
from taskbri.utils.progress import compute_progress

logger = logging.getLogger(__name__)

query = QueryType()
mutation = MutationType()
project_type = ObjectType("Project")


async def get_member_project(repository: Repository, project_id, identity: User) -> Project:
    """Fetch a project the caller belongs to, NotFound/Forbidden otherwise."""
    project = await repository.projects.find_by_id(project_id)
    if project is None:
        raise NotFound("Project not found")
    require_membership(project, identity)
    return project


def clean_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValidationFailed("Project title must not be empty")
    return title


@query.field("myProjects")
async def resolve_my_projects(_, info):
    identity = require_identity(info)
    repository = info.context["repository"]
    projects = await repository.projects.find_many(repository.projects.has_member(identity.id))
    return sorted(projects, key=lambda project: project.created_at)


@query.field("getProject")
async def resolve_get_project(_, info, id):
    identity = require_identity(info)
    project = await info.context["repository"].projects.find_by_id(id)
    if project is not None:
        require_membership(project, identity)
    return project


@mutation.field("createProject")
async def resolve_create_project(_, info, title):
    identity = require_identity(info)
    project = Project(title=clean_title(title), user_ids=[str(identity.id)])
    await info.context["repository"].projects.insert_one(project)
    logger.info(f"User {identity.id} created project {project.id}")
    return project


@mutation.field("updateProject")
async def resolve_update_project(_, info, id, title):
    identity = require_identity(info)
    repository = info.context["repository"]
    project = await get_member_project(repository, id, identity)

    await repository.projects.update_one(project.id, {"title": clean_title(title)})
    forget(info, ("project", str(project.id)))

    # Not transactional: a concurrent writer may show up in the re-fetch
    updated = await repository.projects.find_by_id(project.id)
    if updated is None:
        raise NotFound("Project not found")
    return updated


@mutation.field("deleteProject")
async def resolve_delete_project(_, info, id):
    identity = require_identity(info)
    repository = info.context["repository"]
    project = await repository.projects.find_by_id(id)
    if project is None:
        return True

    require_membership(project, identity)
    await repository.delete_project_cascade(project.id)
    forget(info, ("project", str(project.id)))
    forget(info, ("task_lists", str(project.id)))
    logger.info(f"User {identity.id} deleted project {project.id}")
    return True


@mutation.field("deleteAllProjects")
async def resolve_delete_all_projects(_, info):
    identity = require_identity(info)
    repository = info.context["repository"]
    projects = await repository.projects.find_many(repository.projects.has_member(identity.id))
    for project in projects:
        await repository.delete_project_cascade(project.id)
        forget(info, ("project", str(project.id)))
        forget(info, ("task_lists", str(project.id)))
    logger.info(f"User {identity.id} deleted {len(projects)} project(s)")
    return True


@mutation.field("addUserToProject")
async def resolve_add_user_to_project(_, info, project_id, user_email):
    identity = require_identity(info)
    repository = info.context["repository"]
    project = await get_member_project(repository, project_id, identity)

    user = await repository.users.find_one(email=user_email)
    if user is None:
        raise UserNotFound()

    # Membership is an ordered set: adding an existing member is a no-op
    if not project.has_member(user.id):
        await repository.projects.update_one(
            project.id, {"user_ids": [*project.user_ids, str(user.id)]}
        )
        forget(info, ("project", str(project.id)))

    updated = await repository.projects.find_by_id(project.id)
    if updated is None:
        raise NotFound("Project not found")
    return updated


@mutation.field("deleteUserFromProject")
async def resolve_delete_user_from_project(_, info, project_id, user_id):
    identity = require_identity(info)
    target_id = parse_id(user_id)
    if target_id == identity.id:
        raise SelfRemovalForbidden()

    repository = info.context["repository"]
    project = await get_member_project(repository, project_id, identity)
    if target_id is not None and project.has_member(target_id):
        remaining = [uid for uid in project.user_ids if uid != str(target_id)]
        await repository.projects.update_one(project.id, {"user_ids": remaining})
        forget(info, ("project", str(project.id)))
        logger.info(f"User {identity.id} removed {target_id} from project {project.id}")
    return True


@project_type.field("id")
def resolve_project_id(project: Project, info):
    return str(project.id)


@project_type.field("progress")
async def resolve_progress(project: Project, info):
    return compute_progress(await load_task_lists(info, project.id))


@project_type.field("users")
async def resolve_users(project: Project, info):
    # Concurrent lookups; gather keeps user_ids order, missing users stay None
    return await asyncio.gather(*(load_user(info, user_id) for user_id in project.user_ids))


@project_type.field("taskLists")
async def resolve_task_lists(project: Project, info):
    return await load_task_lists(info, project.id)
