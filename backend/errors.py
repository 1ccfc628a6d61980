"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class RecipeProxyError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class UpstreamStatusError(RecipeProxyError):
    """Spoonacular answered with a non-2xx status."""

    def __init__(self, status: int, data=None):
        super().__init__(f"Spoonacular API error: {status}", status_code=502)
        self.status = status
        self.data = data


class UpstreamTimeoutError(RecipeProxyError):
    def __init__(self, message: str = "Upstream timeout contacting Spoonacular"):
        super().__init__(message, status_code=504)


class UpstreamUnavailableError(RecipeProxyError):
    def __init__(self, message: str = "No response from Spoonacular"):
        super().__init__(message, status_code=502)


class UpstreamPayloadError(RecipeProxyError):
    """Upstream answered 2xx but the body is not what we can serve."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message, status_code=502)
        self.missing = missing


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(UpstreamPayloadError)
    async def handle_payload_error(_request: Request, exc: UpstreamPayloadError):
        body = {"error": str(exc)}
        if exc.missing:
            body["missing"] = exc.missing
        return JSONResponse(body, status_code=exc.status_code)

    @app.exception_handler(RecipeProxyError)
    async def handle_recipe_proxy_error(_request: Request, exc: RecipeProxyError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse({"error": "Not found"}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
