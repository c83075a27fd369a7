"""JSON envelopes shared by every handler"""
from typing import Any

from fastapi.responses import JSONResponse


def success(data: Any = None, status_code: int = 200, message: str = None) -> JSONResponse:
    content = {"status": "success"}
    if message is not None:
        content["message"] = message
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


def failed(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "Failed", "message": message})
