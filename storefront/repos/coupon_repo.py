# storefront/repos/coupon_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.data.models.coupon import CouponModel


class CouponRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_code(self, code: str) -> CouponModel | None:
        # kody bez rozrozniania wielkosci liter
        return self.db.execute(
            select(CouponModel).where(func.upper(CouponModel.code) == code.strip().upper())
        ).scalar_one_or_none()

    def list_featured(self) -> list[CouponModel]:
        return list(
            self.db.execute(
                select(CouponModel)
                .where(CouponModel.is_featured.is_(True), CouponModel.is_active.is_(True))
                .order_by(CouponModel.code)
            ).scalars()
        )

    def increment_usage(self, coupon: CouponModel) -> None:
        coupon.usage_count = (coupon.usage_count or 0) + 1
        self.db.flush()
