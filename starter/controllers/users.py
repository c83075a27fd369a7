"""
User controllers: parse the request, call the service, shape the envelope.
"""
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from starter.exceptions import NotFoundError, StarterError
from starter.models.user_models import UserCreate, UserUpdate
from starter.responses import failed, success
from starter.router import RequestContext

MAX_USER_ID = 2**31 - 1


def _user_id(ctx: RequestContext) -> int:
    try:
        user_id = int(ctx.params["id"])
    except (KeyError, ValueError):
        raise NotFoundError("User not found") from None
    # ids outside the Integer column range can never exist
    if not 0 < user_id <= MAX_USER_ID:
        raise NotFoundError("User not found")
    return user_id


async def _body(ctx: RequestContext) -> dict:
    if ctx.request is None:
        return {}
    return await ctx.request.json()


async def list_users(ctx: RequestContext) -> JSONResponse:
    users = await run_in_threadpool(ctx.deps.users.list_users)
    return success([u.model_dump(mode="json") for u in users])


async def get_user(ctx: RequestContext) -> JSONResponse:
    try:
        user = await run_in_threadpool(ctx.deps.users.get_user, _user_id(ctx))
    except StarterError as e:
        return failed(e.message, e.status_code)
    return success(user.model_dump(mode="json"))


async def create_user(ctx: RequestContext) -> JSONResponse:
    try:
        payload = UserCreate.model_validate(await _body(ctx))
    # bad JSON and non-UTF-8 bodies both surface as ValueError
    except (ValueError, ValidationError):
        return failed("Invalid request body", 400)

    try:
        user = await run_in_threadpool(ctx.deps.users.create_user, payload)
    except StarterError as e:
        return failed(e.message, e.status_code)
    return success(user.model_dump(mode="json"), status_code=201)


async def update_user(ctx: RequestContext) -> JSONResponse:
    try:
        user_id = _user_id(ctx)
    except StarterError as e:
        return failed(e.message, e.status_code)

    try:
        payload = UserUpdate.model_validate(await _body(ctx))
    except (ValueError, ValidationError):
        return failed("Invalid request body", 400)

    try:
        user = await run_in_threadpool(ctx.deps.users.update_user, user_id, payload)
    except StarterError as e:
        return failed(e.message, e.status_code)
    return success(user.model_dump(mode="json"))


async def delete_user(ctx: RequestContext) -> JSONResponse:
    try:
        await run_in_threadpool(ctx.deps.users.delete_user, _user_id(ctx))
    except StarterError as e:
        return failed(e.message, e.status_code)
    return success(message="User deleted")
