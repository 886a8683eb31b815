"""
Pytest configuration.

Every test runs against a fresh in-memory SQLite database that replaces the
application's ``get_db`` dependency.
"""

import os

# Set environment variables before the application modules read them
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.pop("SEED_ADMIN_EMAIL", None)
os.environ.pop("SEED_ADMIN_PASSWORD", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from beauty_manager.auth import create_access_token, hash_password  # noqa: E402
from beauty_manager.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from beauty_manager.main import app  # noqa: E402
from beauty_manager.models import User  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

OWNER_PASSWORD = "secret123"


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """TestClient bound to the test database"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db_session, email: str) -> User:
    user = User(
        email=email,
        password_hash=hash_password(OWNER_PASSWORD),
        phone="(11) 98888-7777",
        address={
            "cep": "01310100",
            "state": "SP",
            "city": "São Paulo",
            "street": "Avenida Paulista",
            "number": "1000",
            "complement": "",
        },
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def user(db_session):
    return make_user(db_session, "owner@salon.com")


@pytest.fixture
def other_user(db_session):
    return make_user(db_session, "other@salon.com")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture
def create_service(client, auth_headers):
    """Factory creating a catalog service through the API"""

    def _create(name="Corte", price=50.0, headers=None):
        resp = client.post(
            "/services", json={"name": name, "price": price}, headers=headers or auth_headers
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def create_client(client, auth_headers):
    """Factory creating a roster client through the API"""

    def _create(name="Maria Silva", neighborhood=None, headers=None):
        payload = {"name": name, "phone": "(11) 91234-5678"}
        if neighborhood:
            payload["address"] = {"neighborhood": neighborhood}
        resp = client.post("/clients", json=payload, headers=headers or auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def create_appointment(client, auth_headers):
    """Factory booking an appointment through the API"""

    def _create(client_id, service_ids, date, start="10:00", end="11:00", status=None, headers=None):
        payload = {
            "clientId": client_id,
            "serviceIds": service_ids,
            "date": date,
            "startTime": start,
            "endTime": end,
        }
        if status:
            payload["status"] = status
        resp = client.post("/appointments", json=payload, headers=headers or auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
