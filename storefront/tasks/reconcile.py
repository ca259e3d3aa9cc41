# storefront/tasks/reconcile.py
from datetime import datetime, timedelta, timezone

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.domain.schemas import OrderStatus
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger
from storefront.utils.settings import ORPHAN_ORDER_GRACE_SECONDS

logger = get_logger(__name__)


def flag_orphan_orders(db, now: datetime | None = None) -> list[str]:
    """
    Naglowki zamowien bez linii (przerwany commit / zapis z zewnatrz)
    dostaja status needs_review. Zwraca id oflagowanych zamowien.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(seconds=ORPHAN_ORDER_GRACE_SECONDS)

    repo = OrderRepo(db)
    orphans = repo.find_orphans(created_before=cutoff, skip_status=OrderStatus.NEEDS_REVIEW.value)

    logger.info(f"Found {len(orphans)} orders without lines")

    for order in orphans:
        logger.warning(f"Order {order.id} of user {order.user_id} has no lines, flagging for review")
        order.order_status = OrderStatus.NEEDS_REVIEW.value

    db.commit()
    return [o.id for o in orphans]


@celery_app.task(name="storefront.tasks.reconcile.flag_orphan_orders_task")
def flag_orphan_orders_task():
    logger.info("Orphan orders task started")

    db = SessionLocal()
    try:
        return flag_orphan_orders(db)
    finally:
        db.close()
