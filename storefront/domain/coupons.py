# storefront/domain/coupons.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Iterable, Optional

from storefront.domain.errors import CouponRejected, CouponRejection
from storefront.domain.pricing import PriceCalculator
from storefront.domain.schemas import Coupon, DiscountType
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CouponValidator:
    """
    Ocena kuponu wzgledem aktualnego koszyka.
    Zwraca kwote rabatu albo rzuca CouponRejected z konkretnym powodem.
    Nie trzyma stanu - "zastosowany kupon" przechowuje wolajacy.
    """

    def __init__(
        self,
        calculator: PriceCalculator | None = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.calculator = calculator or PriceCalculator()
        self.now = now

    def validate(self, coupon: Optional[Coupon], lines: Iterable) -> Decimal:
        lines = list(lines)
        subtotal = self.calculator.cart_subtotal(lines)
        count = self.calculator.cart_count(lines)

        if coupon is None:
            raise CouponRejected(CouponRejection.NOT_FOUND, "Invalid coupon code")

        if not coupon.is_active or self._exhausted(coupon):
            raise CouponRejected(CouponRejection.INACTIVE, f"Coupon {coupon.code} is not active")

        if coupon.expiry_date is not None and self._aware(coupon.expiry_date) < self.now():
            raise CouponRejected(CouponRejection.EXPIRED, f"Coupon {coupon.code} has expired")

        if coupon.minimum_order_value is not None and subtotal < coupon.minimum_order_value:
            raise CouponRejected(
                CouponRejection.BELOW_MINIMUM_ORDER_VALUE,
                f"Minimum order value {coupon.minimum_order_value} required",
            )

        if coupon.min_items is not None and count < coupon.min_items:
            raise CouponRejected(
                CouponRejection.BELOW_MINIMUM_ITEM_COUNT,
                f"Minimum {coupon.min_items} items required",
            )

        if coupon.discount_type == DiscountType.PERCENTAGE:
            discount = subtotal * coupon.discount_value / 100
            if coupon.max_discount_amount is not None and discount > coupon.max_discount_amount:
                discount = coupon.max_discount_amount
        else:
            discount = coupon.discount_value

        discount = min(discount, self.calculator.max_discount(subtotal))

        logger.info(f"Coupon {coupon.code} accepted, discount {discount} on subtotal {subtotal}")
        return discount

    @staticmethod
    def _exhausted(coupon: Coupon) -> bool:
        return coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit

    @staticmethod
    def _aware(moment: datetime) -> datetime:
        # sqlite oddaje naiwne daty, traktujemy je jako UTC
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment
