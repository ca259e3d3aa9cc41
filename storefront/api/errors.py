# storefront/api/errors.py
from fastapi import HTTPException

from storefront.domain.errors import (
    CheckoutConflict,
    CouponRejected,
    NotAuthorized,
    NotFound,
    ValidationError,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def http_error(e: Exception) -> HTTPException:
    """Sklasyfikowany blad serwisu -> HTTPException."""
    if isinstance(e, CouponRejected):
        return HTTPException(status_code=422, detail={"reason": e.reason.value, "message": str(e)})
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NotAuthorized):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, CheckoutConflict):
        return HTTPException(status_code=409, detail=str(e))
    # baza / redis / reszta StorefrontError
    logger.error(f"Store unavailable: {e}")
    return HTTPException(status_code=503, detail="Store temporarily unavailable")
