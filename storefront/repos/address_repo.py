# storefront/repos/address_repo.py
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_addresses(self, user_id: str) -> list[AddressModel]:
        return list(
            self.db.execute(
                select(AddressModel)
                .where(AddressModel.user_id == user_id)
                .order_by(AddressModel.is_default.desc(), AddressModel.created_at.asc())
            ).scalars()
        )

    def get_address(self, address_id: str) -> AddressModel | None:
        return self.db.get(AddressModel, address_id)

    def count_for_user(self, user_id: str) -> int:
        return self.db.execute(
            select(func.count()).select_from(AddressModel).where(AddressModel.user_id == user_id)
        ).scalar_one()

    def add_address(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address

    def clear_default(self, user_id: str) -> None:
        self.db.execute(
            update(AddressModel)
            .where(AddressModel.user_id == user_id, AddressModel.is_default.is_(True))
            .values(is_default=False)
        )
