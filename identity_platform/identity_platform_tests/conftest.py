import pytest
from fastapi.testclient import TestClient

from identity_platform.identity_service.auth import TokenIssuer
from identity_platform.identity_service.config import Settings
from identity_platform.identity_service.db import build_engine, build_session_factory, init_db
from identity_platform.identity_service.main import create_app

TEST_SECRET = "test-signing-secret-with-enough-length-for-hs256"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'identity_test.db'}",
        JWT_SECRET=TEST_SECRET,
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def token_issuer(settings):
    return TokenIssuer.from_settings(settings)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
