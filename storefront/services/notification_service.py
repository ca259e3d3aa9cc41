# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach, wysylane przez Celery.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str):
        send_order_notification_task.delay(user_id, order_id)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str):
    """
    Potwierdzenie zamowienia - na razie tylko log (SMS/push poza zakresem).
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} confirmed, pickup scheduled")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
