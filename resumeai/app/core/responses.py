"""
Response envelope helpers: {success, message, data?, error?, requestId}
"""
import uuid
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def get_request_id(request: Request) -> str:
    """Request id assigned by the middleware in main.py (fresh UUID if missing)."""
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
    return request_id


def envelope(request: Request, message: str, data: Any = None) -> dict:
    """Success envelope. FastAPI serializes the returned dict."""
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    body["requestId"] = get_request_id(request)
    return body


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error: str | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    """Failure envelope with correlation id."""
    body: dict[str, Any] = {"success": False, "message": message}
    if error:
        body["error"] = error
    body["requestId"] = get_request_id(request)
    return JSONResponse(status_code=status_code, content=body, headers=headers)
