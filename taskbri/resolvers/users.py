"""Account resolvers: sign-up, sign-in, password and avatar management."""
import logging

from ariadne import MutationType, ObjectType, QueryType
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError

from taskbri.errors import DuplicateEmail, InvalidCredentials, NotFound
from taskbri.middleware.auth import require_identity
from taskbri.models.user import User
from taskbri.resolvers.loaders import forget
from taskbri.schemas.auth import (
    ForgetPasswordInput,
    PasswordChangeInput,
    SignInInput,
    SignUpInput,
    parse_input,
)

logger = logging.getLogger(__name__)

query = QueryType()
mutation = MutationType()
user_type = ObjectType("User")


@user_type.field("id")
def resolve_user_id(user: User, info):
    return str(user.id)


@query.field("getUser")
async def resolve_get_user(_, info, id):
    require_identity(info)
    return await info.context["repository"].users.find_by_id(id)


@query.field("getLoggedInUserDetails")
def resolve_logged_in_user(_, info):
    return require_identity(info)


@mutation.field("signUp")
async def resolve_sign_up(_, info, input):
    data = parse_input(SignUpInput, input)
    repository = info.context["repository"]
    credentials = info.context["credentials"]

    # Check if user already exists; the unique index covers concurrent sign-ups
    if await repository.users.find_one(email=input["email"]):
        raise DuplicateEmail()

    user = User(
        name=data.name,
        email=input["email"],
        password=await run_in_threadpool(credentials.hash, data.password),
        avatar=data.avatar,
    )
    try:
        await repository.users.insert_one(user)
    except IntegrityError:
        raise DuplicateEmail()

    logger.info(f"Created user {user.id}")
    return {"user": user, "token": credentials.issue_token(user)}


@mutation.field("signIn")
async def resolve_sign_in(_, info, input):
    data = parse_input(SignInInput, input)
    credentials = info.context["credentials"]

    user = await info.context["repository"].users.find_one(email=data.email)
    if not user:
        raise InvalidCredentials()

    if not await run_in_threadpool(credentials.verify, data.password, user.password):
        raise InvalidCredentials()

    return {"user": user, "token": credentials.issue_token(user)}


@mutation.field("changePassword")
async def resolve_change_password(_, info, new_password):
    identity = require_identity(info)
    data = parse_input(PasswordChangeInput, {"new_password": new_password})
    credentials = info.context["credentials"]

    digest = await run_in_threadpool(credentials.hash, data.new_password)
    await info.context["repository"].users.update_one(identity.id, {"password": digest})
    logger.info(f"Password changed for user {identity.id}")
    return True


@mutation.field("forgetUserPassword")
async def resolve_forget_user_password(_, info, email, old_password, new_password):
    data = parse_input(
        ForgetPasswordInput,
        {"email": email, "old_password": old_password, "new_password": new_password},
    )
    repository = info.context["repository"]
    credentials = info.context["credentials"]

    user = await repository.users.find_one(email=data.email)
    if not user:
        raise NotFound("No user with that email")

    if not await run_in_threadpool(credentials.verify, data.old_password, user.password):
        raise InvalidCredentials()

    digest = await run_in_threadpool(credentials.hash, data.new_password)
    await repository.users.update_one(user.id, {"password": digest})
    logger.info(f"Password reset for user {user.id}")
    return True


@mutation.field("updateAvatar")
async def resolve_update_avatar(_, info, new_avatar):
    identity = require_identity(info)
    await info.context["repository"].users.update_one(identity.id, {"avatar": new_avatar})
    forget(info, ("user", str(identity.id)))
    return True
