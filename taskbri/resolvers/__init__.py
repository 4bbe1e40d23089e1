"""Resolvers package for the TaskBri GraphQL API."""

from .projects import mutation as projects_mutation, project_type, query as projects_query
from .task_lists import mutation as task_lists_mutation, task_list_type
from .users import mutation as users_mutation, query as users_query, user_type

bindables = [
    users_query,
    projects_query,
    users_mutation,
    projects_mutation,
    task_lists_mutation,
    user_type,
    project_type,
    task_list_type,
]

__all__ = ["bindables"]
