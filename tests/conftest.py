import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('JWT_SECRET_KEY', 'profile-app-test-secret-long-enough-for-hs256-and-hs512-signing')

from profile_app.auth.jwt_handler import TokenSigner  # noqa: E402
from profile_app.database import Base  # noqa: E402
from profile_app.models.user import User  # noqa: E402
from profile_app.services.credentials import CredentialService  # noqa: E402

TEST_SECRET = 'profile-app-test-secret-long-enough-for-hs256-and-hs512-signing'
TEST_PASSWORD_ROUNDS = 4


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[User.__table__])
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def token_signer() -> TokenSigner:
    return TokenSigner(secret_key=TEST_SECRET, algorithm='HS256', expires_minutes=360)


@pytest.fixture
def credential_service(db_session, token_signer) -> CredentialService:
    return CredentialService(db_session, token_signer, password_rounds=TEST_PASSWORD_ROUNDS)


@pytest.fixture
def client(session_factory, token_signer):
    from fastapi.testclient import TestClient

    from profile_app.auth.jwt_handler import get_token_signer
    from profile_app.main import app
    from profile_app.services.dependencies import get_credential_service

    def override_credential_service():
        db = session_factory()
        try:
            yield CredentialService(db, token_signer, password_rounds=TEST_PASSWORD_ROUNDS)
        finally:
            db.close()

    app.dependency_overrides[get_credential_service] = override_credential_service
    app.dependency_overrides[get_token_signer] = lambda: token_signer
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_token(client) -> str:
    client.post(
        '/auth/signup',
        json={'username': 'ada', 'password': 'Abc123', 'campus': 'Madrid', 'course': 'Web Dev'},
    )
    response = client.post('/auth/login', json={'username': 'ada', 'password': 'Abc123'})
    return response.json()['authToken']
