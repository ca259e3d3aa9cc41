# storefront/client/cart.py
import functools
import threading
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Callable, List

from pydantic import ValidationError as PydanticValidationError

from storefront.domain.errors import InvalidQuantity, NotFound, ValidationError
from storefront.domain.pricing import PriceCalculator
from storefront.domain.schemas import CartLine, CartLineIn, ProductIn, ServiceIn
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[List[CartLine]], None]


def check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity("Quantity must be a whole number")
    return quantity


def build_line(product, service, quantity) -> CartLineIn:
    """Produkt + usluga + ilosc -> pola nowej linii (walidacja przed zmiana stanu)."""
    if check_quantity(quantity) < 1:
        raise InvalidQuantity("Quantity must be at least 1")

    try:
        product = ProductIn.model_validate(product)
        service = ServiceIn.model_validate(service)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid product or service ({e.error_count()} problems)") from e

    return CartLineIn.from_selection(product, service, quantity)


def serialized(method):
    """Mutacje jednego koszyka ida po kolei - jeden pisarz naraz."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._write_lock:
            return method(self, *args, **kwargs)

    return wrapper


class Cart(ABC):
    """
    Wspolny interfejs koszyka sesyjnego i trwalego.
    Konsument czyta snapshot (lines) i subskrybuje zmiany.
    """

    def __init__(self):
        self._lines: list[CartLine] = []
        self._listeners: list[Listener] = []
        self._write_lock = threading.RLock()

    #query
    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def count(self) -> int:
        return PriceCalculator.cart_count(self._lines)

    @property
    def subtotal(self) -> Decimal:
        return PriceCalculator.cart_subtotal(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, line_id: str) -> CartLine:
        for line in self._lines:
            if line.id == line_id:
                return line
        raise NotFound("Cart line not found")

    def find(self, product_name: str, service_type: str) -> CartLine | None:
        for line in self._lines:
            if line.key == (product_name, service_type):
                return line
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        snapshot = self.lines
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # blad widoku nie cofa zmiany koszyka
                logger.exception("Cart listener failed")

    #commands
    @abstractmethod
    def add(self, product, service, quantity: int = 1) -> CartLine: ...

    @abstractmethod
    def set_quantity(self, line_id: str, quantity: int) -> CartLine | None: ...

    @abstractmethod
    def remove(self, line_id: str) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def refresh(self) -> list[CartLine]: ...
