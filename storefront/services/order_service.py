# storefront/services/order_service.py
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_line import OrderLineModel
from storefront.domain.coupons import CouponValidator
from storefront.domain.errors import CheckoutConflict, NotAuthorized, NotFound, ValidationError
from storefront.domain.pricing import ZERO, PriceCalculator, line_total, to_display
from storefront.domain.schemas import (
    Coupon,
    Order,
    OrderDraft,
    OrderStatus,
    PaymentStatus,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.coupon_repo import CouponRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger
from storefront.utils.settings import ORDER_LOCK_TTL_SECONDS

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Commit zamowienia (naglowek + linie + czyszczenie koszyka) to jedna transakcja.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
        calculator: PriceCalculator | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.coupon_repo = CouponRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()
        self.calculator = calculator or PriceCalculator()

    def place_order(self, user_id: str, draft: OrderDraft) -> Order:
        """
        Use Case: zlozenie zamowienia z przygotowanego draftu.

        1. Powtorzony id tego samego usera = replay, zwracamy istniejace zamowienie
        2. Lock per user (drugi klik "zamow")
        3. Weryfikacja kwot (linie, kupon, total)
        4. Naglowek + linie + wyczyszczenie koszyka w jednym commicie
        5. Powiadomienie (async)
        """
        existing = self.repo.get_order(draft.id)
        if existing:
            return self._replay(existing, user_id)

        if not self.lock_service.acquire_checkout_lock(user_id, draft.id, ORDER_LOCK_TTL_SECONDS):
            raise CheckoutConflict("Another order is being placed for this account")

        try:
            coupon_model = self._verify_totals(draft)

            order = OrderModel(
                id=draft.id,
                user_id=user_id,
                total_amount=draft.total_amount,
                payment_method=draft.payment_method,
                payment_status=PaymentStatus.PENDING.value,
                order_status=OrderStatus.CONFIRMED.value,
                pickup_date=draft.pickup_date,
                delivery_date=draft.delivery_date,
                delivery_slot=draft.delivery_slot.value,
                delivery_address=draft.delivery_address,
                address_details=draft.address_details.model_dump(mode="json"),
                applied_coupon_code=coupon_model.code if coupon_model else None,
                discount_amount=draft.discount_amount,
            )
            order.lines = [
                OrderLineModel(
                    product_name=line.product_name,
                    product_price=line.product_price,
                    service_type=line.service_type,
                    service_price=line.service_price,
                    quantity=line.quantity,
                    line_total=line.line_total,
                )
                for line in draft.lines
            ]

            self.repo.create_order(order)
            if coupon_model:
                self.coupon_repo.increment_usage(coupon_model)
            cleared = self.cart_repo.delete_all(user_id)

            self.db.commit()

        except Exception as e:
            logger.error(f"Order {draft.id} for user {user_id} not committed: {e}")
            self.db.rollback()
            raise
        finally:
            self._release_lock(user_id, draft.id)

        logger.info(
            f"Order {order.id} committed for user {user_id}: {len(order.lines)} lines, "
            f"total {order.total_amount}, {cleared} cart lines cleared"
        )

        self._notify(user_id, order.id)
        return Order.model_validate(order)

    def get_order(self, order_id: str, user_id: str) -> Order:
        """
        Use Case: pobranie zamowienia (Query).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFound("Order not found")

        if order.user_id != user_id:
            raise NotAuthorized("No access to this order")

        return Order.model_validate(order)

    def list_orders(self, user_id: str) -> list[Order]:
        return [Order.model_validate(o) for o in self.repo.list_orders(user_id)]

    def _replay(self, existing: OrderModel, user_id: str) -> Order:
        if existing.user_id != user_id:
            raise NotAuthorized("Order id already used by another account")

        logger.info(f"Order {existing.id} already committed, returning it")
        return Order.model_validate(existing)

    def _verify_totals(self, draft: OrderDraft):
        # kazda kwota musi sie zgadzac co do grosza z tym co liczy kalkulator
        for line in draft.lines:
            expected = line_total(line.product_price, line.service_price, line.quantity)
            if to_display(expected) != to_display(line.line_total):
                raise ValidationError(f"Line total of {line.product_name} does not match its prices")

        coupon_model = None
        discount = ZERO

        if draft.applied_coupon_code:
            coupon_model = self.coupon_repo.get_by_code(draft.applied_coupon_code)
            coupon = Coupon.model_validate(coupon_model) if coupon_model else None
            # CouponRejected leci dalej z konkretnym powodem
            discount = CouponValidator(self.calculator).validate(coupon, draft.lines)

        if to_display(discount) != to_display(draft.discount_amount):
            raise ValidationError("Discount does not match the applied coupon")

        subtotal = self.calculator.cart_subtotal(draft.lines)
        expected_total = self.calculator.grand_total(subtotal, discount)
        if to_display(expected_total) != to_display(draft.total_amount):
            raise ValidationError("Order total does not match the cart")

        return coupon_model

    def _release_lock(self, user_id: str, order_id: str):
        # lock i tak wygasnie po TTL, blad redisa nie cofa zapisanego zamowienia
        try:
            self.lock_service.release_checkout_lock(user_id, order_id)
        except Exception as e:
            logger.warning(f"Failed to release checkout lock of user {user_id} for order {order_id}: {e}")

    def _notify(self, user_id: str, order_id: str):
        # zamowienie juz zapisane, brak brokera nie moze go cofnac
        try:
            self.notification_service.send_order_notification(user_id, order_id)
        except Exception as e:
            logger.warning(f"Failed to enqueue notification for order {order_id}: {e}")
