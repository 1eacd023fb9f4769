import os

# Must run before tarbiya is imported: settings and the engine are built at import time.
os.environ["TARBIYA_DATABASE_URL"] = "sqlite://"
os.environ["TARBIYA_BCRYPT_ROUNDS"] = "4"
os.environ["TARBIYA_SECRET_KEY"] = "test-secret"

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tarbiya.db.base import Base  # noqa: E402
from tarbiya.db.session import SessionLocal, engine  # noqa: E402
from tarbiya.main import app  # noqa: E402
from tarbiya.models.account import Account  # noqa: E402
from tarbiya.services.account_service import create_account  # noqa: E402


@pytest.fixture(autouse=True)
def reset_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_account(db):
    counter = {"n": 0}

    def _make(email: str | None = None, *, premium: bool = False) -> Account:
        counter["n"] += 1
        account = create_account(db, email=email or f"parent{counter['n']}@example.com", password="secret123")
        if premium:
            account.is_premium = True
            db.commit()
        return account

    return _make


def signup(client: TestClient, email: str, password: str = "secret123") -> dict:
    resp = client.post("/auth/signup", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    body = resp.json()
    token = client.post("/auth/token", data={"username": email, "password": password}).json()["access_token"]
    return {"account": body, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def parent_a(client):
    return signup(client, "a@example.com")


@pytest.fixture
def parent_b(client):
    return signup(client, "b@example.com")


@pytest.fixture
def paired(client, parent_a, parent_b):
    resp = client.post(
        "/coparents/pair",
        json={"invite_code": parent_b["account"]["invite_code"]},
        headers=parent_a["headers"],
    )
    assert resp.status_code == 200, resp.text
    return parent_a, parent_b


BIRTHDAY = date(2019, 4, 2)
