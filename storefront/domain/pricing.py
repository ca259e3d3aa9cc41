# storefront/domain/pricing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from pydantic import BaseModel

from storefront.domain.errors import CouponRejection
from storefront.utils.settings import DELIVERY_FEE, PLATFORM_FEE, TAX_RATE

ZERO = Decimal("0")
TWO_PLACES = Decimal("0.01")


def line_total(product_unit_price, service_unit_price, quantity: int) -> Decimal:
    """(cena produktu + cena uslugi) * ilosc, bez zaokraglen."""
    return (Decimal(str(product_unit_price)) + Decimal(str(service_unit_price))) * quantity


def to_display(amount: Decimal) -> Decimal:
    # zaokraglamy tylko na wyjsciu
    return Decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class Bill(BaseModel):
    """Rachunek pokazywany na checkoucie, kwoty juz zaokraglone do groszy."""

    item_count: int
    subtotal: Decimal
    delivery_fee: Decimal
    platform_fee: Decimal
    tax: Decimal
    discount: Decimal
    grand_total: Decimal
    coupon_code: Optional[str] = None
    coupon_rejection: Optional[CouponRejection] = None


class PriceCalculator:
    """
    Czyste obliczenia rachunku.
    Linie to cokolwiek z polami quantity i line_total (CartLine, OrderLine).
    """

    def __init__(
        self,
        delivery_fee: Decimal | None = None,
        tax_rate: Decimal | None = None,
        platform_fee: Decimal | None = None,
    ):
        self.delivery_fee = DELIVERY_FEE if delivery_fee is None else Decimal(str(delivery_fee))
        self.tax_rate = TAX_RATE if tax_rate is None else Decimal(str(tax_rate))
        self.platform_fee = PLATFORM_FEE if platform_fee is None else Decimal(str(platform_fee))

    @staticmethod
    def cart_count(lines: Iterable) -> int:
        return sum(line.quantity for line in lines)

    @staticmethod
    def cart_subtotal(lines: Iterable) -> Decimal:
        return sum((Decimal(str(line.line_total)) for line in lines), ZERO)

    def tax(self, subtotal: Decimal) -> Decimal:
        return subtotal * self.tax_rate

    def fees(self) -> Decimal:
        return self.delivery_fee + self.platform_fee

    def max_discount(self, subtotal: Decimal) -> Decimal:
        # rabat nigdy nie zjada oplat, tylko towar + podatek
        return subtotal + self.tax(subtotal)

    def grand_total(self, subtotal: Decimal, discount: Decimal = ZERO) -> Decimal:
        total = subtotal + self.fees() + self.tax(subtotal) - discount
        return max(total, self.fees())

    def bill(
        self,
        lines: Iterable,
        discount: Decimal = ZERO,
        coupon_code: str | None = None,
        coupon_rejection: CouponRejection | None = None,
    ) -> Bill:
        lines = list(lines)
        subtotal = self.cart_subtotal(lines)

        return Bill(
            item_count=self.cart_count(lines),
            subtotal=to_display(subtotal),
            delivery_fee=to_display(self.delivery_fee),
            platform_fee=to_display(self.platform_fee),
            tax=to_display(self.tax(subtotal)),
            discount=to_display(discount),
            grand_total=to_display(self.grand_total(subtotal, discount)),
            coupon_code=coupon_code,
            coupon_rejection=coupon_rejection,
        )
