# storefront/client/http_remote.py
from typing import Optional

import requests
from requests import RequestException

from storefront.client.remote import StoreRemote
from storefront.domain.errors import (
    CheckoutConflict,
    CouponRejected,
    CouponRejection,
    NotAuthorized,
    NotFound,
    RemoteUnavailable,
    ValidationError,
)
from storefront.domain.schemas import Address, AddressIn, CartLine, CartLineIn, Coupon, Order, OrderDraft
from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry
from storefront.utils.settings import STORE_API_TIMEOUT, STORE_API_URL

logger = get_logger(__name__)


def _detail(resp):
    try:
        return resp.json().get("detail")
    except (ValueError, AttributeError):
        return None


def raise_for_store_status(resp) -> None:
    """Kod HTTP z remote store -> sklasyfikowany blad."""
    status = resp.status_code
    if status < 400:
        return

    detail = _detail(resp)

    if status == 422 and isinstance(detail, dict) and "reason" in detail:
        raise CouponRejected(CouponRejection(detail["reason"]), detail.get("message"))
    if status in (400, 422):
        raise ValidationError(str(detail or "Invalid request"))
    if status in (401, 403):
        raise NotAuthorized(str(detail or "Not authorized"))
    if status == 404:
        raise NotFound(str(detail or "Not found"))
    if status == 409:
        raise CheckoutConflict(str(detail or "Conflict"))

    raise RemoteUnavailable(f"Store answered {status}")


class HttpStoreRemote(StoreRemote):
    """Klient HTTP remote store (FastAPI), retry przez tenacity."""

    def __init__(self, base_url: str | None = None, timeout: int | None = None, session=None):
        self.base_url = (base_url or STORE_API_URL).rstrip("/")
        self.timeout = timeout or STORE_API_TIMEOUT
        self.session = session or requests.Session()

    def _send(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        logger.info(f"StoreRemote {method} {url}")

        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if resp.status_code >= 500:
            # 5xx traktujemy jak blad transportu - idzie do retry
            raise requests.HTTPError(f"{resp.status_code} from {url}", response=resp)
        return resp

    _send_retrying = http_retry()(_send)

    def _call(self, method: str, path: str, retry: bool = True, **kwargs):
        send = self._send_retrying if retry else self._send
        try:
            resp = send(method, path, **kwargs)
        except RequestException as e:
            logger.error(f"StoreRemote {method} {path} failed: {e}")
            raise RemoteUnavailable("Store temporarily unavailable") from e

        raise_for_store_status(resp)
        return resp

    #koszyk
    def fetch_lines(self, user_id: str) -> list[CartLine]:
        resp = self._call("GET", "/cart", params={"user_id": user_id})
        return [CartLine.model_validate(item) for item in resp.json()]

    def add_line(self, user_id: str, line: CartLineIn) -> CartLine:
        # upsert nie jest idempotentny (+= quantity), bez ponawiania
        resp = self._call(
            "POST", "/cart/lines", retry=False,
            params={"user_id": user_id}, json=line.model_dump(mode="json"),
        )
        return CartLine.model_validate(resp.json())

    def update_line(self, user_id: str, line_id: str, quantity: int) -> CartLine:
        resp = self._call(
            "PATCH", f"/cart/lines/{line_id}",
            params={"user_id": user_id}, json={"quantity": quantity},
        )
        return CartLine.model_validate(resp.json())

    def delete_line(self, user_id: str, line_id: str) -> None:
        self._call("DELETE", f"/cart/lines/{line_id}", params={"user_id": user_id})

    def delete_all_lines(self, user_id: str) -> None:
        self._call("DELETE", "/cart", params={"user_id": user_id})

    #kupony
    def get_coupon(self, code: str) -> Optional[Coupon]:
        try:
            resp = self._call("GET", f"/coupons/{code}")
        except NotFound:
            return None
        return Coupon.model_validate(resp.json())

    def list_featured_coupons(self) -> list[Coupon]:
        resp = self._call("GET", "/coupons")
        return [Coupon.model_validate(item) for item in resp.json()]

    #adresy
    def list_addresses(self, user_id: str) -> list[Address]:
        resp = self._call("GET", "/addresses", params={"user_id": user_id})
        return [Address.model_validate(item) for item in resp.json()]

    def add_address(self, user_id: str, address: AddressIn) -> Address:
        resp = self._call(
            "POST", "/addresses", retry=False,
            params={"user_id": user_id}, json=address.model_dump(mode="json"),
        )
        return Address.model_validate(resp.json())

    def set_default_address(self, user_id: str, address_id: str) -> Address:
        resp = self._call("POST", f"/addresses/{address_id}/default", params={"user_id": user_id})
        return Address.model_validate(resp.json())

    #zamowienia
    def commit_order(self, user_id: str, draft: OrderDraft) -> Order:
        # id zamowienia nadaje klient, serwer traktuje powtorke jako replay
        resp = self._call("POST", "/orders", params={"user_id": user_id}, json=draft.model_dump(mode="json"))
        return Order.model_validate(resp.json())

    def get_order(self, user_id: str, order_id: str) -> Order:
        resp = self._call("GET", f"/orders/{order_id}", params={"user_id": user_id})
        return Order.model_validate(resp.json())

    def list_orders(self, user_id: str) -> list[Order]:
        resp = self._call("GET", "/orders", params={"user_id": user_id})
        return [Order.model_validate(item) for item in resp.json()]
