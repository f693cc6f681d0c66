"""
Test fixtures and configuration.
"""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from helpers.fakes import FakeNotifier
from notaire.config.settings import Settings, override_settings, reset_settings
from notaire.di.container import (
    initialize_container,
    reset_container,
    shutdown_container,
)
from notaire.domain.entities.user import User, generate_owner_id
from notaire.infrastructure.persistence.database import Database
from notaire.infrastructure.persistence.repositories.asset_repository import (
    AssetRepository,
)
from notaire.infrastructure.persistence.repositories.chain_identity_registry import (  # noqa: E501
    ChainIdentityRegistry,
)
from notaire.infrastructure.persistence.repositories.transfer_repository import (
    TransferRepository,
)
from notaire.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from notaire.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def test_settings(tmp_path) -> Settings:
    """
    Install test settings for every test.

    Optional backends are off; each test gets its own media directory.
    """
    settings = Settings(
        ENV="test",
        DATABASE_URL=TEST_DATABASE_URL,
        STORAGE_PATH=str(tmp_path / "media"),
        JWT_SECRET_KEY="test-secret-key",
        LOG_LEVEL="DEBUG",
        IPFS_ENABLED=False,
        CHAIN_RPC_URL=None,
        NFT_CONTRACT_ADDRESS=None,
        CHAIN_OPERATOR_ADDRESS=None,
        TWILIO_ACCOUNT_SID=None,
        TWILIO_AUTH_TOKEN=None,
        TWILIO_FROM_NUMBER=None,
        OTP_TTL_SECONDS=None,
    )
    override_settings(settings)
    reset_container()

    yield settings

    reset_container()
    reset_settings()


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database with schema."""
    db = Database(database_url=TEST_DATABASE_URL, echo=False)
    await db.connect()
    await db.create_schema()

    yield db

    await db.disconnect()


@pytest.fixture
def user_repository(database: Database) -> UserRepository:
    return UserRepository(database)


@pytest.fixture
def asset_repository(database: Database) -> AssetRepository:
    return AssetRepository(database)


@pytest.fixture
def transfer_repository(database: Database) -> TransferRepository:
    return TransferRepository(database)


@pytest.fixture
def chain_identities(database: Database) -> ChainIdentityRegistry:
    return ChainIdentityRegistry(database)


@pytest.fixture
def make_user(
    user_repository: UserRepository,
) -> Callable[..., Awaitable[User]]:
    """Factory persisting a user with a unique verification number."""
    counter = {"n": 0}

    async def _make_user(name: str = "Test User", phone: str = "9876543210") -> User:
        counter["n"] += 1
        return await user_repository.create(
            User(
                name=name,
                verification_id=f"{123456780000 + counter['n']:012d}",
                phone=phone,
                owner_id=generate_owner_id(),
            )
        )

    return _make_user


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest_asyncio.fixture
async def api_client(
    test_settings: Settings, notifier: FakeNotifier
) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client bound to a fully wired app.

    ASGITransport does not run the lifespan, so the container is
    initialized here. SMS goes to the capturing notifier.
    """
    app = create_app(test_settings)
    container = await initialize_container()
    container._notifier = notifier

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    await shutdown_container()
