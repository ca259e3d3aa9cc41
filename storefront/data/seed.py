# storefront/data/seed.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models.coupon import CouponModel

DEMO_COUPONS = [
    dict(code="SAVE20", description="20% off, up to 50", discount_type="percentage",
         discount_value=Decimal("20"), max_discount_amount=Decimal("50"), is_featured=True),
    dict(code="FLAT100", description="100 off orders above 500", discount_type="fixed",
         discount_value=Decimal("100"), minimum_order_value=Decimal("500"), is_featured=True),
    dict(code="BULK5", description="10% off for 5 or more garments", discount_type="percentage",
         discount_value=Decimal("10"), min_items=5),
]


def seed(session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        # tylko jesli pusto
        if db.query(CouponModel).first():
            return 0
        expiry = datetime.now(timezone.utc) + timedelta(days=90)
        for data in DEMO_COUPONS:
            db.add(CouponModel(is_active=True, expiry_date=expiry, **data))
        db.commit()
        return len(DEMO_COUPONS)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
