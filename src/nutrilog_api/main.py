"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutrilog_api.agents.llm import get_llm_info
from nutrilog_api.api.routes import auth, dashboard, meals, recipes, settings as settings_routes, weight
from nutrilog_api.core.config import Settings, get_settings
from nutrilog_api.core.exceptions import APIError
from nutrilog_api.db.mongo import MongoDB

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the Mongo client for the app's lifetime.

    Indexes are created on startup; an unreachable server fails the
    startup instead of the first request.
    """
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"Starting {settings.app_name} v{settings.api_version} (timezone {settings.timezone})")

    MongoDB.connect(settings.mongo_uri, settings.db_name)
    await MongoDB.ensure_indexes()
    logger.info(f"MongoDB connected, database '{settings.db_name}'")

    if not settings.is_llm_configured:
        logger.warning(
            f"No API key for LLM provider '{settings.llm_provider.value}'; "
            "photo analysis and recipes will fail until one is set"
        )

    yield

    MongoDB.close()
    logger.info("MongoDB connection closed")


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render APIError subclasses as ``{"error", "details"}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details,
        },
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="Personal nutrition tracking: meal photos, weight progress and recipe ideas",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(APIError, api_error_handler)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
            "mongodb": MongoDB.is_connected(),
            "llm": get_llm_info(settings),
        }

    app.include_router(auth.router, prefix="/auth", tags=["Auth"])
    app.include_router(dashboard.router, tags=["Dashboard"])
    app.include_router(meals.router, prefix="/meals", tags=["Meals"])
    app.include_router(weight.router, prefix="/weight", tags=["Weight"])
    app.include_router(settings_routes.router, prefix="/settings", tags=["Settings"])
    app.include_router(recipes.router, prefix="/recipes", tags=["Recipes"])

    return app


# Create app instance
app = create_app()
