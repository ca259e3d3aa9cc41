# storefront/domain/addresses.py
import re

from storefront.domain.errors import ValidationError
from storefront.domain.schemas import AddressIn

_PINCODE = re.compile(r"^\d{6}$")

REQUIRED_FIELDS = ("full_address", "city", "state", "pincode")


def validate_address(payload: AddressIn) -> None:
    missing = [name for name in REQUIRED_FIELDS if not (getattr(payload, name) or "").strip()]
    if missing:
        raise ValidationError(f"Please fill all required fields: {', '.join(missing)}")

    if not _PINCODE.match(payload.pincode.strip()):
        raise ValidationError("Pincode must be 6 digits")
