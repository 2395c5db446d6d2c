import time
import pytest
import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient
from inventory_service.auth.verifier import CredentialVerifier
from inventory_service.application.dispatcher import AuthorizationDispatcher
from inventory_service.application.gateway import PersistenceGateway
from inventory_service.core_settings import Settings
from inventory_service.infrastructure.db import create_engine_for_url, init_models, make_session_factory
from inventory_service.main import create_app

SERVICE_VERSION = "9.9.9"

def _private_pem(key) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )

@pytest.fixture(scope="session")
def signing_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)

@pytest.fixture(scope="session")
def other_signing_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)

@pytest.fixture(scope="session")
def public_pem(signing_key) -> bytes:
    return signing_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )

@pytest.fixture
def make_token(signing_key):
    """Signed token factory. ``exp_in`` is seconds from now; None omits ``exp``."""
    def _make(tier="invadmin", aid=1, exp_in=3600, algorithm="PS256", key=None, **claims):
        payload = {"aid": aid, "invsvc": tier, "sub": "test-user"}
        if exp_in is not None:
            payload["exp"] = int(time.time()) + exp_in
        payload.update(claims)
        return jwt.encode(payload, _private_pem(key or signing_key), algorithm=algorithm)
    return _make

@pytest.fixture
def admin_token(make_token):
    return make_token("invadmin", aid=1)

@pytest.fixture
def rw_token(make_token):
    return make_token("invrw", aid=1)

@pytest.fixture
def ro_token(make_token):
    return make_token("invro", aid=1)

@pytest.fixture
def verifier(public_pem):
    return CredentialVerifier(public_pem)

@pytest.fixture
def engine():
    engine = create_engine_for_url("sqlite://")
    init_models(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def gateway(engine):
    return PersistenceGateway(make_session_factory(engine), service_version=SERVICE_VERSION)

@pytest.fixture
def dispatcher(verifier, gateway):
    return AuthorizationDispatcher(verifier, gateway)

@pytest.fixture
def app(engine, verifier):
    settings = Settings(SERVICE_VERSION=SERVICE_VERSION, LOG_LEVEL="WARNING", RUN_MIGRATIONS=False)
    return create_app(settings=settings, engine=engine, verifier=verifier)

@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
