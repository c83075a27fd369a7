from fastapi.responses import JSONResponse

from starter.responses import success
from starter.router import RequestContext


async def welcome(ctx: RequestContext) -> JSONResponse:
    return success(message="Welcome to the server")
