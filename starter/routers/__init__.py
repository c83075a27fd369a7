from typing import Any

from starter.router import Router
from starter.routers import home, users


def build_router(deps: Any = None) -> Router:
    """Application router with every route table mounted"""
    router = Router(deps=deps)
    router.include("/", home.router)
    router.include("/api/v1/users", users.router)
    # /api/v1/auth is not implemented; requests there fall through to the 404
    return router
