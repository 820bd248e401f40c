"""Shared fixtures.

Every test gets its own file-backed SQLite database, an in-memory blob
store and notifiers that record what they were asked to send.
"""

import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import sessionmaker

from storefront.config import get_settings
from storefront.database import get_db, init_db, make_engine
from storefront.main import app
from storefront.middleware.security import limiter
from storefront.models import Event, Product, Category, Setting
from storefront.models.user import User, UserRole
from storefront.services.notifications import NotificationDispatcher, Notifier, get_dispatcher
from storefront.services.storage import BlobStore, get_blob_store


class MemoryBlobStore(BlobStore):
    """Keeps blobs in a dict. Fails every put after `fail_after` blobs are stored."""

    def __init__(self, fail_after=None):
        self.blobs = {}
        self.deleted = []
        self.fail_after = fail_after

    async def put(self, key, data, content_type):
        if self.fail_after is not None and len(self.blobs) >= self.fail_after:
            raise OSError("blob storage unavailable")
        self.blobs[key] = data
        return f"https://blobs.test/{key}"

    async def delete(self, key):
        self.deleted.append(key)
        self.blobs.pop(key, None)


class RecordingNotifier(Notifier):
    def __init__(self, channel="recording", fail=False):
        self.channel = channel
        self.fail = fail
        self.sent = []

    async def send(self, notification):
        if self.fail:
            raise RuntimeError(f"{self.channel} transport down")
        self.sent.append(notification)
        return True


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _disable_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'storefront.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def unreachable_db(tmp_path):
    """A session whose database file cannot be opened."""
    engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'storefront.db'}")
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def owner_notifier():
    return RecordingNotifier("owner")


@pytest.fixture
def email_notifier():
    return RecordingNotifier("email")


@pytest.fixture
def dispatcher(owner_notifier, email_notifier):
    return NotificationDispatcher(owner=owner_notifier, email=email_notifier)


@pytest.fixture
def client(session_factory, blob_store, dispatcher):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, open_id, role=UserRole.USER):
    user = User(open_id=open_id, name=open_id.title(), email=f"{open_id}@example.com", role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def mint_token(open_id, expires_delta=timedelta(hours=1)):
    """Sign a token the way the login provider does."""
    settings = get_settings()
    claims = {"sub": open_id, "exp": datetime.utcnow() + expires_delta}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def auth_headers(user):
    return {"Authorization": f"Bearer {mint_token(user.open_id)}"}


@pytest.fixture
def admin(db):
    return make_user(db, "admin", UserRole.ADMIN)


@pytest.fixture
def customer(db):
    return make_user(db, "customer")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


def make_event(db, slug="summer-show", total=10, available=None, price=2500, days=30, **kwargs):
    event = Event(
        name=kwargs.pop("name", "Summer Show"),
        slug=slug,
        venue="Main Hall",
        event_date=datetime.utcnow() + timedelta(days=days),
        ticket_price=price,
        total_tickets=total,
        available_tickets=total if available is None else available,
        **kwargs
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def make_category(db, slug="shirts", display_order=0):
    category = Category(name=slug.title(), slug=slug, display_order=display_order)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def make_product(db, slug="linen-shirt", price=4500, **kwargs):
    product = Product(
        name=kwargs.pop("name", slug.replace("-", " ").title()),
        slug=slug,
        price=price,
        **kwargs
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def set_setting(db, key, value):
    db.add(Setting(key=key, value=value))
    db.commit()
