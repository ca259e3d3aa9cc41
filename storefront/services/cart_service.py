# storefront/services/cart_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart_line import CartLineModel
from storefront.domain.errors import NotAuthorized, NotFound
from storefront.domain.pricing import line_total
from storefront.domain.schemas import CartLine, CartLineIn
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Trwaly koszyk zalogowanego usera (remote cart records).
    commands (add, update, remove, clear) modyfikuja stan
    query (list) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    #query
    def list_lines(self, user_id: str) -> list[CartLine]:
        return [CartLine.model_validate(line) for line in self.repo.list_lines(user_id)]

    #commands
    def add_line(self, user_id: str, payload: CartLineIn) -> CartLine:
        """
        Upsert po (produkt, usluga): istniejaca linia dostaje += quantity,
        w przeciwnym razie nowy rekord.
        """
        existing = self.repo.find_line(user_id, payload.product_name, payload.service_type)

        if existing:
            return self._increment(existing, payload.quantity)

        line = CartLineModel(
            user_id=user_id,
            product_name=payload.product_name,
            product_image=payload.product_image,
            product_price=payload.product_price,
            service_type=payload.service_type,
            service_price=payload.service_price,
            quantity=payload.quantity,
            line_total=payload.line_total,
            category=payload.category or "general",
        )

        try:
            self.repo.add_line(line)
            self.repo.commit()
        except IntegrityError:
            # ktos wstawil te sama pare rownolegle - unique constraint, robimy increment
            self.repo.rollback()
            existing = self.repo.find_line(user_id, payload.product_name, payload.service_type)
            if not existing:
                raise
            return self._increment(existing, payload.quantity)

        logger.info(
            f"Cart line {line.id} added for user {user_id}: "
            f"{payload.product_name} / {payload.service_type} x{payload.quantity}"
        )
        return CartLine.model_validate(line)

    def update_quantity(self, user_id: str, line_id: str, quantity: int) -> CartLine:
        line = self._owned_line(user_id, line_id)

        line.quantity = quantity
        line.line_total = line_total(line.product_price, line.service_price, quantity)
        self.repo.commit()

        logger.info(f"Cart line {line_id} quantity set to {quantity}")
        return CartLine.model_validate(line)

    def remove_line(self, user_id: str, line_id: str) -> None:
        line = self._owned_line(user_id, line_id)
        self.repo.delete_line(line)
        self.repo.commit()
        logger.info(f"Cart line {line_id} removed for user {user_id}")

    def clear(self, user_id: str) -> int:
        removed = self.repo.delete_all(user_id)
        self.repo.commit()
        logger.info(f"Cart of user {user_id} cleared, {removed} lines removed")
        return removed

    def _increment(self, line: CartLineModel, quantity: int) -> CartLine:
        logger.info(
            f"Line {line.id} already in cart, quantity "
            f"{line.quantity} -> {line.quantity + quantity}"
        )
        line.quantity += quantity
        # total zawsze z zapisanych cen jednostkowych
        line.line_total = line_total(line.product_price, line.service_price, line.quantity)
        self.repo.commit()
        return CartLine.model_validate(line)

    def _owned_line(self, user_id: str, line_id: str) -> CartLineModel:
        line = self.repo.get_line(line_id)

        if not line:
            raise NotFound("Cart line not found")

        if line.user_id != user_id:
            raise NotAuthorized("No access to this cart line")

        return line
