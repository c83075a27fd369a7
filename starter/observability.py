import logging
from typing import Any, Optional

import logfire


def configure_logging(service_name: str = "starter", debug: bool = False) -> None:
    """
    Configure Logfire and route stdlib logging (uvicorn, alembic) through it.

    Spans are only shipped when LOGFIRE_TOKEN is set; otherwise they stay local.
    """
    try:
        logfire.configure(service_name=service_name, send_to_logfire="if-token-present")
    except Exception as e:
        print(f"Logfire not configured (running without observability): {e}")
        logfire.configure(service_name=service_name, send_to_logfire=False)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )


def instrument(app: Optional[Any] = None, engine: Optional[Any] = None) -> None:
    if engine is not None:
        logfire.instrument_sqlalchemy(engine=engine)
    if app is not None:
        logfire.instrument_fastapi(app)
