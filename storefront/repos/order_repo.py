# storefront/repos/order_repo.py
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, user_id: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars()
        )

    def find_orphans(self, created_before: datetime, skip_status: str) -> list[OrderModel]:
        # naglowek zamowienia bez zadnej linii = przerwany commit
        return list(
            self.db.execute(
                select(OrderModel).where(
                    ~OrderModel.lines.any(),
                    OrderModel.created_at < created_before,
                    OrderModel.order_status != skip_status,
                )
            ).scalars()
        )

    def update_order_status(self, order_id: str, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.order_status = status
            self.db.flush()
        return order
