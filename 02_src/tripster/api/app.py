"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application, IApplication
from .routes import observability, plans, webhook


# Global application instance
_app: IApplication | None = None


def get_app() -> IApplication:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: IApplication | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Tripster API",
        description="LINE webhook bridge for the Tripster travel assistant",
        version="0.1.0",
        lifespan=lifespan,
    )

    # The trip-planner form posts from wherever it is hosted
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    fastapi_app.include_router(webhook.create_webhook_router(application))
    fastapi_app.include_router(plans.create_plans_router(application))
    fastapi_app.include_router(observability.create_observability_router(application))

    return fastapi_app
