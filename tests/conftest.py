"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from config import Config
from shortlinks.actions import LinkActions
from shortlinks.auth import JWTIdentityProvider
from shortlinks.database.memory import InMemoryLinkStore
from shortlinks.links import LinkRepository
from shortlinks.revalidation import Revalidator
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(logger):
    """Create an in-memory link store."""
    store = InMemoryLinkStore(logger=logger)

    yield store

    await store.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def repository(store, short_code_generator, logger):
    """Create link repository over the in-memory store."""
    return LinkRepository(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def identity_provider():
    return JWTIdentityProvider(secret=TEST_SECRET)


@pytest.fixture
def token_for():
    """Issue identity provider tokens for test users."""
    def _issue(owner_id: str, secret: str = TEST_SECRET) -> str:
        return jwt.encode({"sub": owner_id}, secret, algorithm="HS256")
    return _issue


@pytest.fixture
def revalidations():
    """Record (owner_id, path) of every revalidation signal."""
    return []


@pytest.fixture
def actions(repository, identity_provider, revalidations, logger):
    """Create entry points with a recording revalidation listener."""
    revalidator = Revalidator(logger=logger)

    async def record(owner_id, path):
        revalidations.append((owner_id, path))

    revalidator.subscribe(record)
    return LinkActions(
        repository=repository,
        identity_provider=identity_provider,
        revalidator=revalidator,
        logger=logger,
    )


@pytest.fixture
def config():
    return Config(
        database_url="memory://",
        base_url="http://testserver",
        auth_jwt_secret=TEST_SECRET,
    )


@pytest.fixture
def app(store, actions, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        actions_instance=actions,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
