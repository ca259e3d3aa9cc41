# storefront/data/models/order.py
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, Date, DateTime, Numeric, String, Text
from sqlalchemy.orm import relationship

from storefront.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class OrderModel(Base):
    __tablename__ = "orders"

    # id nadaje klient (IX + timestamp)
    id = Column(String(40), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)

    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(40), nullable=False)
    payment_status = Column(String(20), nullable=False, default="pending")
    order_status = Column(String(20), nullable=False, default="confirmed")

    pickup_date = Column(Date, nullable=False)
    delivery_date = Column(Date, nullable=False)
    delivery_slot = Column(String(20), nullable=False)

    delivery_address = Column(Text, nullable=False)
    address_details = Column(JSON, nullable=False)

    applied_coupon_code = Column(String(64), nullable=True)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    lines = relationship(
        "OrderLineModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineModel.id",
    )
