# storefront/client/checkout.py
import secrets
import time
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional

from storefront.client.addresses import AddressBook
from storefront.client.cart import Cart
from storefront.client.persistent_cart import PersistentCartService
from storefront.client.remote import StoreRemote
from storefront.domain.coupons import CouponValidator
from storefront.domain.errors import CouponRejected, ValidationError
from storefront.domain.pricing import ZERO, Bill, PriceCalculator, to_display
from storefront.domain.schemas import (
    Address,
    AddressSnapshot,
    Coupon,
    DeliverySlot,
    Order,
    OrderDraft,
    OrderLine,
)
from storefront.utils.logging import get_logger
from storefront.utils.settings import DEFAULT_PAYMENT_METHOD

logger = get_logger(__name__)


class CheckoutSession:
    """
    Rachunek na checkoucie + zastosowany kupon.

    Kupon jest sprawdzany ponownie przy kazdym liczeniu rachunku: jesli
    po zmianie koszyka przestal sie kwalifikowac, zostaje zdjety, a rachunek
    niesie powod odrzucenia.
    """

    def __init__(
        self,
        cart: Cart,
        remote: StoreRemote,
        calculator: PriceCalculator | None = None,
        validator: CouponValidator | None = None,
    ):
        self.cart = cart
        self.remote = remote
        self.calculator = calculator or PriceCalculator()
        self.validator = validator or CouponValidator(self.calculator)
        self.applied_coupon: Optional[Coupon] = None

    def apply_coupon(self, code: str) -> Bill:
        code = (code or "").strip().upper()
        if not code:
            raise ValidationError("Please enter a coupon code")

        coupon = self.remote.get_coupon(code)
        # CouponRejected leci do wolajacego, stan bez zmian
        self.validator.validate(coupon, self.cart.lines)

        self.applied_coupon = coupon
        logger.info(f"Coupon {coupon.code} applied")
        return self.bill()

    def remove_coupon(self) -> Bill:
        self.applied_coupon = None
        return self.bill()

    def discount(self) -> tuple[Decimal, Optional[CouponRejected]]:
        if self.applied_coupon is None:
            return ZERO, None

        try:
            return self.validator.validate(self.applied_coupon, self.cart.lines), None
        except CouponRejected as e:
            logger.info(f"Coupon {self.applied_coupon.code} no longer applies: {e.reason.value}")
            self.applied_coupon = None
            return ZERO, e

    def bill(self) -> Bill:
        discount, rejection = self.discount()
        return self.calculator.bill(
            self.cart.lines,
            discount=discount,
            coupon_code=self.applied_coupon.code if self.applied_coupon else None,
            coupon_rejection=rejection.reason if rejection else None,
        )


def new_order_id(clock: Callable[[], float] = time.time) -> str:
    # losowa koncowka - dwoch userow w tej samej milisekundzie nie dostanie tego samego id
    return f"IX{int(clock() * 1000)}-{secrets.token_hex(4)}"


class OrderPlacementService:
    """
    Skladanie zamowienia z trwalego koszyka (checkout tylko po zalogowaniu).

    Cale zamowienie (naglowek + snapshot linii) jest przygotowane lokalnie
    i wysylane jednym commit_order; remote zapisuje je razem z czyszczeniem
    koszyka w jednej transakcji.
    """

    def __init__(
        self,
        cart: PersistentCartService,
        checkout: CheckoutSession | None = None,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.time,
    ):
        self.cart = cart
        self.remote = cart.remote
        self.checkout = checkout or CheckoutSession(cart, cart.remote)
        self.today = today
        self.clock = clock

    def place_order(
        self,
        address: Optional[Address],
        slot,
        payment_method: str = DEFAULT_PAYMENT_METHOD,
    ) -> Order:
        address = address or self.default_address()

        try:
            slot = DeliverySlot(slot)
        except ValueError as e:
            raise ValidationError("Please select a delivery slot") from e

        # commit z autorytatywnego stanu remote
        lines = self.cart.fetch()
        if not lines:
            raise ValidationError("Your cart is empty")

        draft = self.prepare(lines, address, slot, payment_method)
        order = self.remote.commit_order(self.cart.user_id, draft)

        logger.info(f"Order {order.id} placed for user {self.cart.user_id}, total {order.total_amount}")

        self.cart.mark_cleared()
        self.checkout.applied_coupon = None
        return order

    def default_address(self) -> Address:
        address = AddressBook(self.remote, self.cart.user_id).default()
        if address is None:
            raise ValidationError("Please select a delivery address")
        return address

    def prepare(self, lines, address: Address, slot: DeliverySlot, payment_method: str) -> OrderDraft:
        bill = self.checkout.bill()
        if bill.coupon_rejection:
            # kupon spadl po zmianie koszyka - user musi zobaczyc nowy rachunek
            raise CouponRejected(bill.coupon_rejection, "Applied coupon no longer applies to this cart")

        # stala doba na realizacje: odbior jutro, dostawa pojutrze
        pickup = self.today() + timedelta(days=1)

        return OrderDraft(
            id=new_order_id(self.clock),
            total_amount=bill.grand_total,
            payment_method=payment_method,
            delivery_slot=slot,
            pickup_date=pickup,
            delivery_date=pickup + timedelta(days=1),
            delivery_address=address.full_address,
            address_details=AddressSnapshot.of(address),
            applied_coupon_code=bill.coupon_code,
            discount_amount=to_display(bill.discount),
            lines=[OrderLine.of(line) for line in lines],
        )
