from dotenv import load_dotenv
load_dotenv()

import asyncio
import sys
from contextlib import asynccontextmanager
from functools import partial

import logfire
from fastapi import FastAPI, Request

from starter.config import Settings, load_settings
from starter.database import Database
from starter.dependencies import build_deps
from starter.exceptions import ConfigurationError
from starter.observability import configure_logging, instrument
from starter.router import HTTP_METHODS, Router, not_found
from starter.routers import build_router
from starter.startup import StartupSequencer, StartupState, UvicornListener


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler for startup and shutdown.
    The database has already been verified by the time this runs.
    """
    logfire.info("Starter API started successfully")

    yield

    logfire.info("Shutting down Starter API...")


def create_app(router: Router) -> FastAPI:
    """
    FastAPI app whose only route hands every request to `router`.

    The docs and openapi routes are disabled so unknown paths always get
    the "Route Not Found" envelope.
    """
    app = FastAPI(
        title="Starter API",
        description="HTTP server wired to a relational database",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.router = router

    @app.api_route("/{path:path}", methods=HTTP_METHODS, include_in_schema=False)
    async def dispatch(request: Request):
        return await router.dispatch(request.method, request.url.path, request)

    # Methods outside HTTP_METHODS never reach the catch-all route
    @app.exception_handler(405)
    async def method_not_allowed(request: Request, exc: Exception):
        return not_found()

    return app


def build_sequencer(settings: Settings, database: Database, app: FastAPI) -> StartupSequencer:
    return StartupSequencer(
        verify=partial(database.verify, sync_schema=settings.DB_SYNC),
        listener=UvicornListener(app, log_level="debug" if settings.DEBUG else "info"),
        host=settings.HOST,
        port=settings.PORT,
    )


def main() -> int:
    configure_logging()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logfire.error("Invalid configuration", missing=e.missing, invalid=e.invalid)
        return 1

    database = Database(settings.database_url)
    app = create_app(build_router(build_deps(database)))
    instrument(app=app, engine=database.engine)

    sequencer = build_sequencer(settings, database, app)
    try:
        state = asyncio.run(sequencer.run())
    finally:
        database.dispose()

    return 1 if state is StartupState.ABORTED else 0


if __name__ == "__main__":
    sys.exit(main())
