import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.client.local_remote import LocalStoreRemote
from storefront.client.session_cart import SessionCartStore
from storefront.client.storage import JsonFileStorage
from storefront.data.database import Base
from storefront.data.models.coupon import CouponModel
from storefront.domain.errors import RemoteUnavailable
from storefront.domain.schemas import AddressIn, ProductIn, ServiceIn

USER = "user-1"
OTHER_USER = "user-2"


class FakeLockService:
    def __init__(self):
        self.held = {}

    def acquire_checkout_lock(self, user_id, token, ttl):
        if user_id in self.held:
            return False
        self.held[user_id] = token
        return True

    def release_checkout_lock(self, user_id, token):
        if self.held.get(user_id) == token:
            del self.held[user_id]
            return True
        return False


class FakeNotifications:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id):
        self.sent.append((user_id, order_id))


class FlakyRemote:
    """Przepuszcza wszystko do prawdziwego remote, ale N-ty zapis linii pada."""

    def __init__(self, inner, fail_on_write):
        self.inner = inner
        self.fail_on_write = fail_on_write
        self.writes = 0

    def __getattr__(self, name):
        return getattr(self.inner, name)

    def _count(self):
        self.writes += 1
        if self.writes == self.fail_on_write:
            raise RemoteUnavailable("Store temporarily unavailable")

    def add_line(self, user_id, line):
        self._count()
        return self.inner.add_line(user_id, line)

    def update_line(self, user_id, line_id, quantity):
        self._count()
        return self.inner.update_line(user_id, line_id, quantity)


class Counter:
    """Zegar rosnacy o 1 s - kolejne id zamowien sie nie powtarzaja."""

    def __init__(self, start=1_800_000_000.0):
        self.now = start

    def __call__(self):
        self.now += 1
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def notifications():
    return FakeNotifications()


@pytest.fixture
def remote(session_factory, lock_service, notifications):
    return LocalStoreRemote(
        session_factory=session_factory,
        lock_service=lock_service,
        notification_service=notifications,
    )


@pytest.fixture
def storage(tmp_path):
    return JsonFileStorage(str(tmp_path / "local_storage.json"))


@pytest.fixture
def session_cart(storage):
    return SessionCartStore(storage=storage)


@pytest.fixture
def shirt():
    return ProductIn(product_name="Shirt", product_price=Decimal("40"), category="men")


@pytest.fixture
def saree():
    return ProductIn(product_name="Saree", product_price=Decimal("150"), category="women")


@pytest.fixture
def steam_iron():
    return ServiceIn(name="Steam Iron", price=Decimal("20"))


@pytest.fixture
def dry_clean():
    return ServiceIn(name="Dry Clean", price=Decimal("100"))


@pytest.fixture
def home_address():
    return AddressIn(
        address_type="home",
        full_address="12 MG Road, Flat 4B",
        landmark="Near City Mall",
        city="Bengaluru",
        state="Karnataka",
        pincode="560001",
    )


@pytest.fixture
def add_coupon(db):
    def _add(code, discount_type="percentage", discount_value="10", **kwargs):
        coupon = CouponModel(
            code=code,
            discount_type=discount_type,
            discount_value=Decimal(discount_value),
            is_active=kwargs.pop("is_active", True),
            **kwargs,
        )
        db.add(coupon)
        db.commit()
        return coupon

    return _add


@pytest.fixture
def fixed_today():
    return lambda: date(2026, 10, 17)
