"""
ASGI application factories.

Each service is built from an explicit settings object; nothing is
created at import time.  Run one with, for example::

    uvicorn --factory newsgate.main:create_gateway_app --port 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from newsgate.clients import DownstreamClients, build_clients
from newsgate.config import (
    CommentStoreSettings,
    GatewaySettings,
    ModeratorSettings,
    NewsSourceSettings,
    configure_logging,
)
from newsgate.database import create_engine, create_session_factory, init_models
from newsgate.errors import install_error_handlers
from newsgate.middleware import RequestContextMiddleware
from newsgate.routers import comments, gateway, moderation, news
from newsgate.services.moderation_service import Moderator

VERSION = "1.0.0"


def _base_app(title: str, settings, lifespan=None) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title=title, version=VERSION, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def create_gateway_app(
    settings: GatewaySettings | None = None,
    clients: DownstreamClients | None = None,
) -> FastAPI:
    settings = settings or GatewaySettings()
    clients = clients or build_clients(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await clients.aclose()

    app = _base_app("News Gateway", settings, lifespan)
    app.state.clients = clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type", "X-Request-ID"],
        max_age=300,
    )
    app.include_router(gateway.router)
    return app


def create_comment_store_app(settings: CommentStoreSettings | None = None) -> FastAPI:
    settings = settings or CommentStoreSettings()
    engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_models(engine)
        yield
        await engine.dispose()

    app = _base_app("Comment Store", settings, lifespan)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.include_router(comments.router)
    return app


def create_moderator_app(settings: ModeratorSettings | None = None) -> FastAPI:
    settings = settings or ModeratorSettings()
    app = _base_app("Moderator", settings)
    app.state.moderator = Moderator(settings.BANNED_TERMS)
    app.include_router(moderation.router)
    return app


def create_news_source_app(settings: NewsSourceSettings | None = None) -> FastAPI:
    settings = settings or NewsSourceSettings()
    app = _base_app("News Source", settings)
    app.include_router(news.router)
    return app
