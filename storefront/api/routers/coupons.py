# storefront/api/routers/coupons.py
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.errors import http_error
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import Coupon
from storefront.services.coupon_service import CouponService

router = APIRouter(prefix="/coupons", tags=["coupons"])


def get_service(db: Session):
    return CouponService(db)


@router.get("", response_model=list[Coupon])
def list_featured(db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.list_featured()
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)


@router.get("/{code}", response_model=Coupon)
def get_coupon(code: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_coupon(code)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)
