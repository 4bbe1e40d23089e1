"""Per-request memoization of read lookups made by nested field resolvers.

A query such as ``myProjects { users { name } taskLists { id } progress }``
asks for the same users and the same task lists many times; each distinct
lookup is issued once per request and shared by every resolver awaiting it.
"""
import asyncio
from typing import Any, Awaitable, Callable, Hashable

CACHE_KEY = "loader_cache"


def load_once(info, key: Hashable, loader: Callable[[], Awaitable[Any]]) -> "asyncio.Future[Any]":
    cache = info.context.setdefault(CACHE_KEY, {})
    if key not in cache:
        cache[key] = asyncio.ensure_future(loader())
    return cache[key]


def forget(info, key: Hashable) -> None:
    """Drop a memoized lookup after a mutation changed what it returns."""
    info.context.setdefault(CACHE_KEY, {}).pop(key, None)


def load_user(info, user_id):
    repository = info.context["repository"]
    return load_once(info, ("user", str(user_id)), lambda: repository.users.find_by_id(user_id))


def load_project(info, project_id):
    repository = info.context["repository"]
    return load_once(info, ("project", str(project_id)), lambda: repository.projects.find_by_id(project_id))


def load_task_lists(info, project_id):
    repository = info.context["repository"]
    return load_once(
        info,
        ("task_lists", str(project_id)),
        lambda: repository.task_lists.find_many(project_id=project_id),
    )
