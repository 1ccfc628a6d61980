"""FastAPI application entry point for the recipe proxy."""

import logging
import sys

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import register_error_handlers
from services.cache import TTLCache
from services.spoonacular import SpoonacularClient

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(
    cache: TTLCache | None = None,
    spoonacular: SpoonacularClient | None = None,
) -> FastAPI:
    app = FastAPI(title="Recipe Proxy API", version="1.0.0")

    # One cache per process, handed to routes through app.state
    app.state.cache = cache if cache is not None else TTLCache()
    app.state.spoonacular = spoonacular if spoonacular is not None else SpoonacularClient()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.recipes import router as recipes_router

    app.include_router(health_router)
    app.include_router(recipes_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = settings.validate()
        if missing:
            logger.error("Missing env vars (upstream calls will fail): %s", ", ".join(missing))

    @app.on_event("shutdown")
    async def _close_upstream() -> None:
        await app.state.spoonacular.aclose()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Server listening on http://localhost:%d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
