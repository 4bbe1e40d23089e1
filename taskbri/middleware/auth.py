"""Request context assembly and the authorization guard used by resolvers."""
from typing import Any, Callable, Dict, Optional

from starlette.requests import Request

from taskbri.db.repository import Repository
from taskbri.errors import Forbidden, InvalidCredential, Unauthenticated
from taskbri.models.project import Project
from taskbri.models.user import User
from taskbri.services.credentials import CredentialService
from taskbri.utils.logger import AuthEventLogger

auth_logger = AuthEventLogger()


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token of an ``Authorization: Bearer`` header, None otherwise."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()  # Remove "Bearer " prefix
    return token or None


def build_context_value(
    repository: Repository, credentials: CredentialService
) -> Callable[..., Any]:
    """
    Create the per-request context factory handed to the GraphQL app.

    The repository and credential service are created once at startup and
    captured here, so resolvers never reach for module-level state.
    """

    async def get_context_value(request: Request, data: Any = None) -> Dict[str, Any]:
        context: Dict[str, Any] = {
            "request": request,
            "repository": repository,
            "credentials": credentials,
            "identity": None,
            "credential_error": None,
        }

        token = extract_bearer_token(request.headers.get("authorization"))
        try:
            user_id = credentials.verify_token(token)
        except InvalidCredential as e:
            # Kept for the guard: public operations still run with a stale token
            context["credential_error"] = e
            auth_logger.token_rejected(str(e))
            return context

        if user_id is not None:
            context["identity"] = await repository.users.find_by_id(user_id)
            if context["identity"] is None:
                auth_logger.unknown_subject(user_id)
        return context

    return get_context_value


def require_identity(info) -> User:
    """
    Return the authenticated user of the current request.

    Raises:
        InvalidCredential: If the bearer token failed verification
        Unauthenticated: If the request carries no identity
    """
    context = info.context
    if context.get("credential_error") is not None:
        raise context["credential_error"]

    identity = context.get("identity")
    if identity is None:
        raise Unauthenticated()
    return identity


def require_membership(project: Project, identity: User) -> None:
    """Raise Forbidden unless identity is listed in project.user_ids."""
    if not project.has_member(identity.id):
        auth_logger.membership_denied(str(project.id), str(identity.id))
        raise Forbidden()
