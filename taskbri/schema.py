"""GraphQL SDL and executable schema for the TaskBri API."""
import logging

from ariadne import format_error as default_format_error
from ariadne import gql, make_executable_schema, unwrap_graphql_error
from graphql import GraphQLError

from taskbri.errors import TaskBriError
from taskbri.resolvers import bindables

logger = logging.getLogger(__name__)

type_defs = gql("""
  type Query {
    myProjects: [Project!]!
    getProject(id: ID!): Project
    getUser(id: ID!): User
    getLoggedInUserDetails: User
  }

  type Mutation {
    signUp(input: SignUpInput!): AuthUser!
    signIn(input: SignInInput!): AuthUser!
    changePassword(newPassword: String!): Boolean!
    forgetUserPassword(email: String!, oldPassword: String!, newPassword: String!): Boolean!
    updateAvatar(newAvatar: String!): Boolean!

    createProject(title: String!): Project!
    updateProject(id: ID!, title: String!): Project!
    deleteProject(id: ID!): Boolean!
    deleteAllProjects: Boolean!
    addUserToProject(projectId: ID!, userEmail: String!): Project!
    deleteUserFromProject(projectId: ID!, userId: ID!): Boolean!

    createTaskList(content: String!, projectId: ID!): TaskList!
    updateTaskList(id: ID!, content: String, isCompleted: Boolean): TaskList!
    deleteTaskList(id: ID!): Boolean!
    deleteAllTasks(projectId: ID!): Boolean!
  }

  input SignUpInput {
    name: String!
    email: String!
    password: String!
    avatar: String
  }

  input SignInInput {
    email: String!
    password: String!
  }

  type AuthUser {
    user: User!
    token: String!
  }

  type User {
    id: ID!
    name: String!
    email: String!
    avatar: String
  }

  type Project {
    id: ID!
    createdAt: String!
    title: String!
    progress: Float!
    userIds: [ID!]!

    # Null at the position of a member whose account no longer exists
    users: [User]!
    taskLists: [TaskList!]!
  }

  type TaskList {
    id: ID!
    content: String!
    isCompleted: Boolean!
    projectId: ID!

    project: Project
  }
""")

schema = make_executable_schema(type_defs, *bindables, convert_names_case=True)


def format_error(error: GraphQLError, debug: bool = False) -> dict:
    """Attach the domain error code; hide internals of unexpected failures."""
    original = unwrap_graphql_error(error)

    if isinstance(original, TaskBriError):
        formatted = dict(error.formatted)
        formatted["extensions"] = {**(formatted.get("extensions") or {}), "code": original.code}
        return formatted

    if original is not None and not isinstance(original, GraphQLError):
        logger.error(f"Unexpected error resolving {error.path}: {original!r}", exc_info=original)
        if not debug:
            formatted = dict(error.formatted)
            formatted["message"] = "Internal server error"
            return formatted

    return default_format_error(error, debug)
