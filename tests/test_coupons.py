from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from storefront.data.models.coupon import CouponModel
from storefront.domain.coupons import CouponValidator
from storefront.domain.errors import CouponRejected, CouponRejection
from storefront.domain.pricing import PriceCalculator
from storefront.domain.schemas import CartLineIn, Coupon

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def validator():
    calc = PriceCalculator(delivery_fee="30", tax_rate="0.12")
    return CouponValidator(calc, now=lambda: NOW)


def cart(subtotal, quantity=1):
    price = Decimal(subtotal) / quantity
    return [CartLineIn(
        product_name="Saree", product_price=price,
        service_type="Dry Clean", service_price=Decimal("0"), quantity=quantity,
    )]


def coupon(**kwargs):
    data = dict(code="TEST", discount_type="percentage", discount_value=Decimal("10"))
    data.update(kwargs)
    return Coupon(**data)


def rejection(validator, c, lines):
    with pytest.raises(CouponRejected) as exc:
        validator.validate(c, lines)
    return exc.value.reason


def test_percentage_capped_by_max_discount(validator):
    save20 = coupon(code="SAVE20", discount_value=Decimal("20"), max_discount_amount=Decimal("50"))
    assert validator.validate(save20, cart("500")) == Decimal("50")


def test_percentage_without_cap(validator):
    assert validator.validate(coupon(discount_value=Decimal("20")), cart("200")) == Decimal("40")


def test_fixed_discount(validator):
    flat = coupon(discount_type="fixed", discount_value=Decimal("100"))
    assert validator.validate(flat, cart("500")) == Decimal("100")


def test_fixed_discount_clamped_to_subtotal_and_tax(validator):
    flat = coupon(discount_type="fixed", discount_value=Decimal("1000"))
    assert validator.validate(flat, cart("100")) == Decimal("112.00")


def test_below_minimum_order_value(validator):
    c = coupon(minimum_order_value=Decimal("300"))
    assert rejection(validator, c, cart("250")) == CouponRejection.BELOW_MINIMUM_ORDER_VALUE
    assert validator.validate(c, cart("300")) == Decimal("30")


def test_below_minimum_item_count(validator):
    c = coupon(min_items=3)
    assert rejection(validator, c, cart("300", quantity=2)) == CouponRejection.BELOW_MINIMUM_ITEM_COUNT
    assert validator.validate(c, cart("300", quantity=3)) == Decimal("30")


def test_unknown_coupon(validator):
    assert rejection(validator, None, cart("100")) == CouponRejection.NOT_FOUND


def test_inactive_coupon(validator):
    assert rejection(validator, coupon(is_active=False), cart("100")) == CouponRejection.INACTIVE


def test_exhausted_coupon_counts_as_inactive(validator):
    c = coupon(usage_limit=10, usage_count=10)
    assert rejection(validator, c, cart("100")) == CouponRejection.INACTIVE


def test_expired_coupon(validator):
    c = coupon(expiry_date=NOW - timedelta(minutes=1))
    assert rejection(validator, c, cart("100")) == CouponRejection.EXPIRED


def test_naive_expiry_is_utc(validator):
    c = coupon(expiry_date=datetime(2026, 10, 17, 13, 0))
    assert validator.validate(c, cart("100")) == Decimal("10")


def test_inactive_checked_before_minimums(validator):
    c = coupon(is_active=False, minimum_order_value=Decimal("1000"))
    assert rejection(validator, c, cart("100")) == CouponRejection.INACTIVE


def test_codes_are_stored_upper_case(db, remote, add_coupon):
    add_coupon("  save20 ", discount_value="20")

    assert db.query(CouponModel).one().code == "SAVE20"
    assert remote.get_coupon("Save20").code == "SAVE20"


def test_codes_differing_only_in_case_are_refused(db, add_coupon):
    add_coupon("SAVE20")

    with pytest.raises(IntegrityError):
        add_coupon("save20")
    db.rollback()

    assert db.query(CouponModel).count() == 1
