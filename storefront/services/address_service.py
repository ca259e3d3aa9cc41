# storefront/services/address_service.py
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.domain.addresses import validate_address
from storefront.domain.errors import NotAuthorized, NotFound
from storefront.domain.schemas import Address, AddressIn
from storefront.repos.address_repo import AddressRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    """Ksiazka adresowa usera. Dokladnie jeden adres domyslny."""

    def __init__(self, db: Session):
        self.repo = AddressRepo(db)
        self.db = db

    def list_addresses(self, user_id: str) -> list[Address]:
        return [Address.model_validate(a) for a in self.repo.list_addresses(user_id)]

    def get_address(self, user_id: str, address_id: str) -> Address:
        return Address.model_validate(self._owned(user_id, address_id))

    def add_address(self, user_id: str, payload: AddressIn) -> Address:
        validate_address(payload)

        # pierwszy adres usera jest domyslny
        is_first = self.repo.count_for_user(user_id) == 0

        address = AddressModel(
            user_id=user_id,
            address_type=payload.address_type.value,
            full_address=payload.full_address.strip(),
            landmark=payload.landmark,
            city=payload.city.strip(),
            state=payload.state.strip(),
            pincode=payload.pincode.strip(),
            latitude=payload.latitude,
            longitude=payload.longitude,
            is_default=is_first,
        )
        self.repo.add_address(address)
        self.db.commit()

        logger.info(f"Address {address.id} added for user {user_id}, default={is_first}")
        return Address.model_validate(address)

    def set_default(self, user_id: str, address_id: str) -> Address:
        address = self._owned(user_id, address_id)

        self.repo.clear_default(user_id)
        address.is_default = True
        self.db.commit()

        logger.info(f"Address {address_id} is now default for user {user_id}")
        return Address.model_validate(address)

    def _owned(self, user_id: str, address_id: str) -> AddressModel:
        address = self.repo.get_address(address_id)

        if not address:
            raise NotFound("Address not found")

        if address.user_id != user_id:
            raise NotAuthorized("No access to this address")

        return address
