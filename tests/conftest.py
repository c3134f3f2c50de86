"""
Test infrastructure for the gateway and its collaborator services.

Strategy
--------
- Every service is a real ASGI app driven in-process through
  ``httpx.ASGITransport``; no network and no running servers.
- The gateway's downstream clients are built with ASGI transports that
  point at the collaborator apps, so the fan-out and write pipeline are
  exercised end to end against real collaborator code.
- The comment store uses SQLite in-memory via aiosqlite.  ``create_engine``
  gives it a ``StaticPool`` so every session shares one connection (an
  in-memory database is connection-scoped).  ASGITransport does not run
  lifespan handlers, so tables are created explicitly per test.
- Failure modes (timeouts, refused connections, malformed bodies) are
  produced with ``respx`` or ``httpx.MockTransport`` on a gateway built
  by ``make_gateway``.
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from newsgate.config import (
    CommentStoreSettings,
    ModeratorSettings,
    NewsSourceSettings,
)
from newsgate.database import init_models
from newsgate.main import (
    create_comment_store_app,
    create_moderator_app,
    create_news_source_app,
)

from gateway_test_utils import COMMENTS_URL, MODERATOR_URL, NEWS_URL, make_gateway

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Collaborator apps
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def comment_store_app():
    """Comment store on a fresh in-memory database."""
    app = create_comment_store_app(CommentStoreSettings(DATABASE_URL=TEST_DATABASE_URL))
    await init_models(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
def news_source_app():
    return create_news_source_app(NewsSourceSettings())


@pytest.fixture
def moderator_app():
    return create_moderator_app(ModeratorSettings())


@pytest_asyncio.fixture
async def db_session(comment_store_app) -> AsyncSession:
    """Live session on the comment store database for direct service tests."""
    async with comment_store_app.state.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def store_client(comment_store_app) -> AsyncClient:
    transport = ASGITransport(app=comment_store_app)
    async with AsyncClient(transport=transport, base_url=COMMENTS_URL) as client:
        yield client


@pytest_asyncio.fixture
async def news_client(news_source_app) -> AsyncClient:
    transport = ASGITransport(app=news_source_app)
    async with AsyncClient(transport=transport, base_url=NEWS_URL) as client:
        yield client


@pytest_asyncio.fixture
async def moderator_client(moderator_app) -> AsyncClient:
    transport = ASGITransport(app=moderator_app)
    async with AsyncClient(transport=transport, base_url=MODERATOR_URL) as client:
        yield client


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def gateway_app(comment_store_app, news_source_app, moderator_app):
    """Gateway wired to the three in-process collaborator apps."""
    app = make_gateway(
        news=ASGITransport(app=news_source_app),
        comments=ASGITransport(app=comment_store_app),
        moderator=ASGITransport(app=moderator_app),
    )
    yield app
    await app.state.clients.aclose()


@pytest_asyncio.fixture
async def async_client(gateway_app) -> AsyncClient:
    transport = ASGITransport(app=gateway_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mocked_gateway_client() -> AsyncClient:
    """
    Gateway whose collaborators are reached over (mocked) HTTP.

    Tests using it must run inside ``respx.mock`` and route every
    collaborator URL they touch.
    """
    app = make_gateway()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.clients.aclose()
