"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillnet.config import Settings
from skillnet.interface.api.routes import health, requests, responses, visibility
from skillnet.util.di.container import create_container, setup_di
from skillnet.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function;
    scripts/start_app.py does so in production.

    Args:
        container: DI container to use; the production container is built
            when omitted (tests pass one with mock components)
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="SkillNet API",
        description="Learning request lifecycle and response arbitration for SkillNet",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(requests.router)
    app_instance.include_router(responses.router)
    app_instance.include_router(visibility.router)

    return app_instance


# App instance for uvicorn
app = create_app()
