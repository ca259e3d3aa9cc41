# storefront/services/coupon_service.py
from sqlalchemy.orm import Session

from storefront.domain.errors import NotFound
from storefront.domain.schemas import Coupon
from storefront.repos.coupon_repo import CouponRepo


class CouponService:
    def __init__(self, db: Session):
        self.repo = CouponRepo(db)

    def get_coupon(self, code: str) -> Coupon:
        coupon = self.repo.get_by_code(code)
        if not coupon:
            raise NotFound("Coupon not found")
        return Coupon.model_validate(coupon)

    def list_featured(self) -> list[Coupon]:
        return [Coupon.model_validate(c) for c in self.repo.list_featured()]
