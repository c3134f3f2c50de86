"""
Error taxonomy shared by the gateway and its collaborator services.

Every exception carries the HTTP status it maps to, so route handlers and
service functions simply raise and the handlers installed by
``install_error_handlers`` render the ``{status: "error", error: ...}``
envelope.

    ClientInputError        400  malformed id / body, oversized text
    ContentRejected         400  moderator reported forbidden terms
    NotFound                404  relayed from a collaborator
    DownstreamUnavailable   500  transport failure, timeout, 5xx, bad envelope
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(GatewayError):
    status_code = 400


class ContentRejected(GatewayError):
    status_code = 400

    def __init__(self, message: str = "Comment contains forbidden words") -> None:
        super().__init__(message)


class NotFound(GatewayError):
    status_code = 404


class DownstreamUnavailable(GatewayError):
    """A collaborator could not produce a usable answer."""

    status_code = 500

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(f"{service}: {reason}")
        self.service = service
        self.reason = reason


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request body: " + "; ".join(parts) if parts else "Invalid request body"


def install_error_handlers(app: FastAPI) -> None:
    """Render every failure as an error envelope."""

    @app.exception_handler(GatewayError)
    async def _gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    # Body/query validation failures are client input errors (400, not 422).
    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")
