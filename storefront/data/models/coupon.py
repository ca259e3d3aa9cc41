# storefront/data/models/coupon.py
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import validates

from storefront.data.database import Base


class CouponModel(Base):
    """Kupony zarzadzane z zewnatrz, tutaj tylko odczyt + licznik uzyc."""

    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True)
    code = Column(String(64), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)

    discount_type = Column(String(20), nullable=False)  # percentage, fixed
    discount_value = Column(Numeric(10, 2), nullable=False)
    max_discount_amount = Column(Numeric(10, 2), nullable=True)
    minimum_order_value = Column(Numeric(10, 2), nullable=True)
    min_items = Column(Integer, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    expiry_date = Column(DateTime(timezone=True), nullable=True)

    usage_limit = Column(Integer, nullable=True)
    usage_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # kod unikalny bez wzgledu na wielkosc liter, takze dla wierszy wpisanych z zewnatrz
    __table_args__ = (
        Index("u_coupon_code_upper", func.upper(code), unique=True),
    )

    @validates("code")
    def _upper_code(self, key, value):
        return value.strip().upper() if value else value
