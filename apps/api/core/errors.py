"""Command response envelope and boundary error handling.

Every operation exposed to the frontend answers with the same envelope:

    {"success": true,  "data": {...}, "error": null}
    {"success": false, "data": null,  "error": "Authentication failed"}

Ingestion and store failures are caught where the command runs and turned
into a readable ``error``; anything unexpected is logged with its traceback
and reported with a generic message. Request validation and unhandled
exceptions that escape a route are rendered as envelopes too, so no local
failure crosses the boundary as a crash.
"""

from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from packages.ingestion_engine.errors import StatementParseError
from packages.ledger_store.errors import LedgerError

logger = structlog.get_logger()

UNEXPECTED_ERROR = "An unexpected error occurred"

# Failures with a message that is safe and useful to show the user.
EXPECTED_ERRORS = (StatementParseError, LedgerError)


class CommandResponse(BaseModel):
    """Response envelope shared by all commands."""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "CommandResponse":
        return cls(success=True, data=_plain(data))

    @classmethod
    def fail(cls, error: str) -> "CommandResponse":
        return cls(success=False, error=error)


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def run_command(command: str, operation: Callable[..., Any], *args, **kwargs) -> CommandResponse:
    """Run one operation and wrap its outcome in a CommandResponse."""
    try:
        result = operation(*args, **kwargs)
    except EXPECTED_ERRORS as e:
        logger.warning("command_failed", command=command, error=str(e))
        return CommandResponse.fail(str(e))
    except Exception:
        logger.exception("command_crashed", command=command)
        return CommandResponse.fail(UNEXPECTED_ERROR)
    return CommandResponse.ok(result)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers that answer with the envelope."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        body = CommandResponse.fail(_validation_message(exc))
        return JSONResponse(status_code=422, content=body.model_dump())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        body = CommandResponse.fail(detail)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("request_crashed", path=str(request.url.path), exc_info=exc)
        body = CommandResponse.fail(UNEXPECTED_ERROR)
        return JSONResponse(status_code=500, content=body.model_dump())
