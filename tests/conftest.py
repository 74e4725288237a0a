import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Add the parent directory to the path so we can import nollyspot modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from nollyspot.core.config import Settings
from nollyspot.core.deps import get_chain_client
from nollyspot.db.base import Base
from nollyspot.db.session import create_db_engine, create_session_factory
from nollyspot.main import create_app
from nollyspot.models import User
from nollyspot.services.chain import ChainClient

NOLLYSPOT_ADDR = "0x1111111111111111111111111111111111111111"
NOLLYWOODSPOT_ADDR = "0x2222222222222222222222222222222222222222"
MERCHANT_ADDR = "0x3333333333333333333333333333333333333333"
REFUND_ADDR = "0x4444444444444444444444444444444444444444"
TX_HASH = "0x" + "ab" * 32
REFUND_HASH = "0x" + "cd" * 32


def make_settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite://",
        create_tables=True,
        provider_url="http://localhost:8545",
        merchant_private_key="0x" + "1" * 64,
        merchant_address=MERCHANT_ADDR,
        nollyspot_token_address=NOLLYSPOT_ADDR,
        nollywoodspot_token_address=NOLLYWOODSPOT_ADDR,
        token_decimals=18,
        platform_fee_percent=2.5,
        refund_address=REFUND_ADDR,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def chain() -> Mock:
    """Chain client double; transfer() returns a fixed hash."""
    mock = Mock(spec=ChainClient)
    mock.transfer.return_value = TX_HASH
    return mock


@pytest.fixture(scope="function")
def db_session() -> Session:
    """Create a fresh in-memory database session for each test."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def user(db_session: Session) -> User:
    u = User(wallet_address="0xabc0000000000000000000000000000000000001")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def app(settings, chain):
    application = create_app(settings)
    application.dependency_overrides[get_chain_client] = lambda: chain
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def app_db(app, client) -> Session:
    """Session on the same database the app under test uses."""
    session = app.state.session_factory()
    yield session
    session.close()
