import os

# Must run before any app module reads settings
os.environ["ENV"] = "test"
os.environ.pop("API_KEY_ENCRYPTION_KEY_B64", None)

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.auth.identity_client import IdentityClient  # noqa: E402
from app.core.errors import UnauthorizedError  # noqa: E402
from app.core.key_manager import KeyHandle, KeyManager  # noqa: E402
from app.db import Base, SessionLocal, engine, get_db  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.credential import ApiCredential  # noqa: E402

pytest_plugins = [
    "tests.fixtures.credential_fixtures",
]

USER_A_TOKEN = "token-user-a"
USER_B_TOKEN = "token-user-b"


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.query(ApiCredential).delete()
        session.commit()
        session.close()


@pytest.fixture
def key_handle() -> KeyHandle:
    return KeyHandle(key=os.urandom(32))


@pytest.fixture
def key_manager(key_handle) -> KeyManager:
    return KeyManager(key_handle)


@pytest.fixture
def user_a_id(faker) -> str:
    return faker.uuid4()


@pytest.fixture
def user_b_id(faker) -> str:
    return faker.uuid4()


@pytest.fixture
def identity_client(user_a_id, user_b_id):
    """Identity provider stub that knows two users."""
    tokens = {USER_A_TOKEN: user_a_id, USER_B_TOKEN: user_b_id}

    def _get_user_id(token):
        if token not in tokens:
            raise UnauthorizedError()
        return tokens[token]

    client = MagicMock(spec=IdentityClient)
    client.configured = True
    client.get_user_id.side_effect = _get_user_id
    return client


def _build_client(db, key_manager, identity_client):
    app = create_app(key_manager=key_manager, identity_client=identity_client)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(db, key_manager, identity_client):
    """Client with db override, a throwaway key and a stubbed identity provider."""
    app = _build_client(db, key_manager, identity_client)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def client_without_key(db, identity_client):
    """Client whose master key was never configured."""
    app = _build_client(db, KeyManager(None), identity_client)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
