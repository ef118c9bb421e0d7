from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskmaster.config import get_settings
from taskmaster.infrastructure.database import engine, initialize_database
from taskmaster.infrastructure.notifications import PushDispatcher, SessionRegistry
from taskmaster.interfaces.api.dependencies import verify_credential
from taskmaster.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the push registry at startup; close every socket on shutdown."""

    initialize_database()
    registry = SessionRegistry(
        verify_credential, auth_timeout=get_settings().ws_auth_timeout_seconds
    )
    app.state.session_registry = registry
    app.state.push_dispatcher = PushDispatcher(registry)
    try:
        yield
    finally:
        await registry.close_all()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="TaskMaster API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
