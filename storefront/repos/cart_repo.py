# storefront/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.data.models.cart_line import CartLineModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_lines(self, user_id: str) -> list[CartLineModel]:
        return list(
            self.db.execute(
                select(CartLineModel)
                .where(CartLineModel.user_id == user_id)
                .order_by(CartLineModel.created_at.desc())
            ).scalars()
        )

    def get_line(self, line_id: str) -> CartLineModel | None:
        return self.db.get(CartLineModel, line_id)

    def find_line(self, user_id: str, product_name: str, service_type: str) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.user_id == user_id,
                CartLineModel.product_name == product_name,
                CartLineModel.service_type == service_type,
            )
        ).scalar_one_or_none()

    def add_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_line(self, line: CartLineModel) -> None:
        self.db.delete(line)
        self.db.flush()

    def delete_all(self, user_id: str) -> int:
        result = self.db.execute(delete(CartLineModel).where(CartLineModel.user_id == user_id))
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
