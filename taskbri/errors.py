"""Domain errors raised by resolvers and surfaced as GraphQL error entries."""


class TaskBriError(Exception):
    """Base class for every error a client is allowed to see."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__


class Unauthenticated(TaskBriError):
    default_message = "Authentication required"


class InvalidCredential(TaskBriError):
    """The bearer token is malformed, badly signed or expired."""

    default_message = "Invalid token"


class InvalidCredentials(TaskBriError):
    """Email/password proof did not match."""

    default_message = "Invalid credentials"


class NotFound(TaskBriError):
    default_message = "Not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class Forbidden(TaskBriError):
    default_message = "Not a member of this project"


class SelfRemovalForbidden(TaskBriError):
    default_message = "You cannot remove yourself from a project"


class DuplicateEmail(TaskBriError):
    default_message = "User with this email already exists"


class ValidationFailed(TaskBriError):
    default_message = "Invalid input"
