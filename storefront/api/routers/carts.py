#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.errors import http_error
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CartLine, CartLineIn, QuantityIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=list[CartLine])
def list_lines(user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.list_lines(user_id)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)


@router.post("/lines", response_model=CartLine, status_code=201)
def add_line(
    payload: CartLineIn,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_line(user_id, payload)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)


@router.patch("/lines/{line_id}", response_model=CartLine)
def update_line(
    line_id: str,
    payload: QuantityIn,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_quantity(user_id, line_id, payload.quantity)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)


@router.delete("/lines/{line_id}", status_code=204)
def remove_line(line_id: str, user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.remove_line(user_id, line_id)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)
    return Response(status_code=204)


@router.delete("", status_code=204)
def clear_cart(user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.clear(user_id)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)
    return Response(status_code=204)
