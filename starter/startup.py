"""
Startup sequencing: verify the database first, open the listener second.

    IDLE -> VERIFYING -> READY    (verification passed, listener bound)
                      -> ABORTED  (verification failed, listener never bound)

There is exactly one attempt. No retry, no backoff, no timeout.
"""
import enum
from typing import Any, Awaitable, Callable, Optional, Protocol

import logfire
import uvicorn


class StartupState(str, enum.Enum):
    IDLE = "idle"
    VERIFYING = "verifying"
    READY = "ready"
    ABORTED = "aborted"


class Listener(Protocol):
    async def serve(self, host: str, port: int) -> None:
        ...


class UvicornListener:
    """Serves an ASGI app with uvicorn until the process is told to stop"""

    def __init__(self, app: Any, log_level: str = "info"):
        self.app = app
        self.log_level = log_level
        self.server: Optional[uvicorn.Server] = None

    async def serve(self, host: str, port: int) -> None:
        # log_config=None keeps the logging handlers installed by configure_logging()
        config = uvicorn.Config(
            self.app,
            host=host,
            port=port,
            log_level=self.log_level,
            log_config=None,
        )
        self.server = uvicorn.Server(config)
        await self.server.serve()


class StartupSequencer:
    def __init__(
        self,
        verify: Callable[[], Awaitable[None]],
        listener: Listener,
        host: str,
        port: int,
    ):
        self.verify = verify
        self.listener = listener
        self.host = host
        self.port = port
        self.state = StartupState.IDLE
        self.error: Optional[Exception] = None

    async def run(self) -> StartupState:
        """
        Verify the data store, then serve.

        Returns ABORTED as soon as verification fails; otherwise returns READY
        once the listener stops serving.
        """
        if self.state is not StartupState.IDLE:
            raise RuntimeError(f"Startup sequence already ran (state: {self.state.value})")

        self.state = StartupState.VERIFYING
        try:
            await self.verify()
        except Exception as e:
            self.state = StartupState.ABORTED
            self.error = e
            logfire.error("Unable to connect to the database", error=str(e))
            return self.state

        self.state = StartupState.READY
        logfire.info("Database connection has been established successfully")
        logfire.info("Starting listener on port {port}", host=self.host, port=self.port)
        await self.listener.serve(self.host, self.port)
        return self.state
