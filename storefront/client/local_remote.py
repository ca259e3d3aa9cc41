# storefront/client/local_remote.py
import functools
from contextlib import contextmanager
from typing import Optional

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from storefront.client.remote import StoreRemote
from storefront.data.database import SessionLocal
from storefront.domain.errors import NotFound, RemoteUnavailable
from storefront.domain.schemas import Address, AddressIn, CartLine, CartLineIn, Coupon, Order, OrderDraft
from storefront.services.address_service import AddressService
from storefront.services.cart_service import CartService
from storefront.services.coupon_service import CouponService
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def classified(method):
    """Bledy bazy / redisa -> RemoteUnavailable."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (SQLAlchemyError, RedisError) as e:
            logger.error(f"Store call {method.__name__} failed: {e}")
            raise RemoteUnavailable("Store temporarily unavailable") from e

    return wrapper


class LocalStoreRemote(StoreRemote):
    """
    Remote store w tym samym procesie - serwisy wolane bezposrednio
    na sesji SQLAlchemy, jedna sesja na wywolanie.
    """

    def __init__(self, session_factory=SessionLocal, lock_service=None, notification_service=None):
        self.session_factory = session_factory
        self.lock_service = lock_service or LockService()
        self.notification_service = notification_service

    @contextmanager
    def _db(self):
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    @classified
    def fetch_lines(self, user_id: str) -> list[CartLine]:
        with self._db() as db:
            return CartService(db).list_lines(user_id)

    @classified
    def add_line(self, user_id: str, line: CartLineIn) -> CartLine:
        with self._db() as db:
            return CartService(db).add_line(user_id, line)

    @classified
    def update_line(self, user_id: str, line_id: str, quantity: int) -> CartLine:
        with self._db() as db:
            return CartService(db).update_quantity(user_id, line_id, quantity)

    @classified
    def delete_line(self, user_id: str, line_id: str) -> None:
        with self._db() as db:
            CartService(db).remove_line(user_id, line_id)

    @classified
    def delete_all_lines(self, user_id: str) -> None:
        with self._db() as db:
            CartService(db).clear(user_id)

    @classified
    def get_coupon(self, code: str) -> Optional[Coupon]:
        with self._db() as db:
            try:
                return CouponService(db).get_coupon(code)
            except NotFound:
                return None

    @classified
    def list_featured_coupons(self) -> list[Coupon]:
        with self._db() as db:
            return CouponService(db).list_featured()

    @classified
    def list_addresses(self, user_id: str) -> list[Address]:
        with self._db() as db:
            return AddressService(db).list_addresses(user_id)

    @classified
    def add_address(self, user_id: str, address: AddressIn) -> Address:
        with self._db() as db:
            return AddressService(db).add_address(user_id, address)

    @classified
    def set_default_address(self, user_id: str, address_id: str) -> Address:
        with self._db() as db:
            return AddressService(db).set_default(user_id, address_id)

    @classified
    def commit_order(self, user_id: str, draft: OrderDraft) -> Order:
        with self._db() as db:
            return self._orders(db).place_order(user_id, draft)

    @classified
    def get_order(self, user_id: str, order_id: str) -> Order:
        with self._db() as db:
            return self._orders(db).get_order(order_id, user_id)

    @classified
    def list_orders(self, user_id: str) -> list[Order]:
        with self._db() as db:
            return self._orders(db).list_orders(user_id)

    def _orders(self, db) -> OrderService:
        return OrderService(
            db,
            lock_service=self.lock_service,
            notification_service=self.notification_service,
        )
