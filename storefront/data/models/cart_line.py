# storefront/data/models/cart_line.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, Numeric, String, UniqueConstraint

from storefront.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class CartLineModel(Base):
    __tablename__ = "cart_lines"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, index=True)

    product_name = Column(String(200), nullable=False)
    product_image = Column(String, nullable=True)
    product_price = Column(Numeric(10, 2), nullable=False)
    service_type = Column(String(100), nullable=False)
    service_price = Column(Numeric(10, 2), nullable=False)

    quantity = Column(Integer, nullable=False)
    line_total = Column(Numeric(12, 2), nullable=False)
    category = Column(String(100), nullable=True, default="general")

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    # jedna linia na (produkt, usluga) w koszyku usera
    __table_args__ = (
        UniqueConstraint("user_id", "product_name", "service_type", name="u_cart_line_product_service"),
    )
