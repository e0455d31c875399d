import os

os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SEED_CATALOG"] = "false"
os.environ.pop("ADMIN_USERNAME", None)
os.environ.pop("ADMIN_PASSWORD", None)

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.data.database import Base, make_engine, make_session_factory
from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.main import create_app
from storefront.repos.user_repo import UserRepo
from storefront.services.lock_service import LockService


class InMemoryLockService(LockService):
    """LockService without Redis, same acquire/release contract."""

    def __init__(self):
        self.held = {}

    def acquire_lock(self, key: str, owner: str, ttl: int) -> bool:
        if key in self.held:
            return False
        self.held[key] = owner
        return True

    def release_lock(self, key: str, owner: str) -> bool:
        if self.held.get(key) != owner:
            return False
        del self.held[key]
        return True

    def close(self):
        self.held.clear()


def make_product(db, name="Street Oversized Tee", price="35.00", category="T-Shirts", **fields):
    product = ProductModel(
        name=name,
        description=fields.pop("description", f"{name} description"),
        price=Decimal(price),
        category=category,
        images=fields.pop("images", ["https://img.example/1.jpg"]),
        stock=fields.pop("stock", 10),
        **fields,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


# ---------------------------
# service level
# ---------------------------
@pytest.fixture
def db():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def lock_service():
    return InMemoryLockService()


@pytest.fixture
def user(db):
    return UserRepo(db).create_user(UserModel(username="alice", password="x"))


@pytest.fixture
def other_user(db):
    return UserRepo(db).create_user(UserModel(username="bob", password="x"))


@pytest.fixture
def catalog(db):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return {
        "tee": make_product(db, "Street Oversized Tee", "35.00", "T-Shirts", created_at=base),
        "hoodie": make_product(db, "Urban Hoodie", "55.00", "Hoodies", created_at=base + timedelta(days=1)),
        "joggers": make_product(db, "Cargo Tech Joggers", "65.00", "Joggers", created_at=base + timedelta(days=2)),
        "zip": make_product(db, "Zip Hoodie", "45.00", "Hoodies", created_at=base + timedelta(days=3)),
    }


# ---------------------------
# HTTP level
# ---------------------------
@pytest.fixture
def app():
    return create_app(
        database_url="sqlite://",
        lock_service=InMemoryLockService(),
        seed_catalog=False,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def app_db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def register(client, username="alice", password="secret123", **extra):
    resp = client.post("/api/register", json={"username": username, "password": password, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


def make_admin(app, username):
    db = app.state.session_factory()
    try:
        user = UserRepo(db).get_user_by_username(username)
        user.is_admin = True
        db.commit()
    finally:
        db.close()
