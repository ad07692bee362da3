import os
import shutil
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MASTER_ADMIN_EMAIL"] = "master@example.com"
os.environ["MASTER_ADMIN_NAME"] = "Master Admin"
os.environ["MASTER_ADMIN_INITIAL_PASSWORD"] = "masterpass123"
os.environ["SEED_MASTER_ADMIN"] = "true"
os.environ["UPLOAD_DIR"] = "test-uploads"

from canhotos.core.config import get_settings
from canhotos.db.base import Base
from canhotos.db.session import SessionLocal, engine
from canhotos.main import create_app
from canhotos.services.access import AccessPolicy
from canhotos.services.credentials import create_user
from canhotos.services.sessions import issue_token

MASTER_EMAIL = "master@example.com"
MASTER_PASSWORD = "masterpass123"
DEFAULT_PASSWORD = "password123"


@pytest.fixture(scope="session", autouse=True)
def cleanup_files():
    yield
    engine.dispose()
    path = Path("test.db")
    if path.exists():
        path.unlink()
    shutil.rmtree(get_settings().upload_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def policy():
    return AccessPolicy(master_admin_email=MASTER_EMAIL)


def make_user(db, name, email, role, password=DEFAULT_PASSWORD):
    return create_user(db, name=name, email=email, password=password, role=role)


def claim_for(user):
    _, claim = issue_token(user)
    return claim


def auth_headers(client, email, password=DEFAULT_PASSWORD):
    resp = client.post("/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def master_headers(client):
    return auth_headers(client, MASTER_EMAIL, MASTER_PASSWORD)


def register_user(client, name, email, role, password=DEFAULT_PASSWORD):
    resp = client.post(
        "/cadastrar",
        headers=master_headers(client),
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()

