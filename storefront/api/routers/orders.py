# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.errors import http_error
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import Order, OrderDraft
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db, lock_service=LockService())


@router.post("", response_model=Order, status_code=201)
def place_order(
    payload: OrderDraft,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    """
    Commit zamowienia z draftu: naglowek + linie + czyszczenie koszyka.
    Powtorzony id zwraca istniejace zamowienie.
    """
    svc = get_service(db)
    try:
        return svc.place_order(user_id, payload)
    except (StorefrontError, SQLAlchemyError, RedisError) as e:
        raise http_error(e)


@router.get("", response_model=list[Order])
def list_orders(user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.list_orders(user_id)
    except (StorefrontError, SQLAlchemyError, RedisError) as e:
        raise http_error(e)


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    """
    Szczegoly zamowienia razem z liniami.
    """
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user_id)
    except (StorefrontError, SQLAlchemyError, RedisError) as e:
        raise http_error(e)
