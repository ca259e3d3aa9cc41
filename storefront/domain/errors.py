# storefront/domain/errors.py
from enum import Enum


class CouponRejection(str, Enum):
    NOT_FOUND = "NotFound"
    INACTIVE = "Inactive"
    EXPIRED = "Expired"
    BELOW_MINIMUM_ORDER_VALUE = "BelowMinimumOrderValue"
    BELOW_MINIMUM_ITEM_COUNT = "BelowMinimumItemCount"


class StorefrontError(Exception):
    """Bazowy blad - kazda sklasyfikowana porazka koszyka i checkoutu."""


class ValidationError(StorefrontError, ValueError):
    """Zle dane wejsciowe, operacja przerwana przed zmiana stanu."""


class InvalidQuantity(ValidationError):
    pass


class NotFound(StorefrontError, LookupError):
    """Linia / adres / zamowienie zniknely - odswiez widok."""


class NotAuthorized(StorefrontError, PermissionError):
    pass


class RemoteUnavailable(StorefrontError):
    """Remote store nie odpowiada, stan lokalny zostaje na ostatnim snapshocie."""


class CheckoutConflict(StorefrontError):
    """Inne skladanie zamowienia tego samego usera jest w toku."""


class MergeInProgress(StorefrontError):
    pass


class CouponRejected(StorefrontError):
    def __init__(self, reason: CouponRejection, message: str | None = None):
        self.reason = reason
        super().__init__(message or reason.value)
