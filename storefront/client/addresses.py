# storefront/client/addresses.py
from typing import Optional

from storefront.client.remote import StoreRemote
from storefront.domain.addresses import validate_address
from storefront.domain.schemas import Address, AddressIn


class AddressBook:
    """Adresy dostawy zalogowanego usera."""

    def __init__(self, remote: StoreRemote, user_id: str):
        self.remote = remote
        self.user_id = user_id

    def addresses(self) -> list[Address]:
        return self.remote.list_addresses(self.user_id)

    def default(self) -> Optional[Address]:
        addresses = self.addresses()
        return next((a for a in addresses if a.is_default), addresses[0] if addresses else None)

    def add(self, address: AddressIn) -> Address:
        # walidacja przed siecia, serwer sprawdza jeszcze raz
        validate_address(address)
        return self.remote.add_address(self.user_id, address)

    def set_default(self, address_id: str) -> Address:
        return self.remote.set_default_address(self.user_id, address_id)
