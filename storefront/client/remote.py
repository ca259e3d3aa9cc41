# storefront/client/remote.py
from abc import ABC, abstractmethod
from typing import Optional

from storefront.domain.schemas import (
    Address,
    AddressIn,
    CartLine,
    CartLineIn,
    Coupon,
    Order,
    OrderDraft,
)


class StoreRemote(ABC):
    """
    Remote store widziany z klienta. Kazda metoda albo sie udaje, albo rzuca
    sklasyfikowany blad (RemoteUnavailable, NotAuthorized, NotFound, ...),
    nigdy surowy wyjatek transportu.
    """

    #koszyk
    @abstractmethod
    def fetch_lines(self, user_id: str) -> list[CartLine]: ...

    @abstractmethod
    def add_line(self, user_id: str, line: CartLineIn) -> CartLine: ...

    @abstractmethod
    def update_line(self, user_id: str, line_id: str, quantity: int) -> CartLine: ...

    @abstractmethod
    def delete_line(self, user_id: str, line_id: str) -> None: ...

    @abstractmethod
    def delete_all_lines(self, user_id: str) -> None: ...

    #kupony
    @abstractmethod
    def get_coupon(self, code: str) -> Optional[Coupon]: ...

    @abstractmethod
    def list_featured_coupons(self) -> list[Coupon]: ...

    #adresy
    @abstractmethod
    def list_addresses(self, user_id: str) -> list[Address]: ...

    @abstractmethod
    def add_address(self, user_id: str, address: AddressIn) -> Address: ...

    @abstractmethod
    def set_default_address(self, user_id: str, address_id: str) -> Address: ...

    #zamowienia
    @abstractmethod
    def commit_order(self, user_id: str, draft: OrderDraft) -> Order: ...

    @abstractmethod
    def get_order(self, user_id: str, order_id: str) -> Order: ...

    @abstractmethod
    def list_orders(self, user_id: str) -> list[Order]: ...
