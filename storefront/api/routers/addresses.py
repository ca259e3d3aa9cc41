# storefront/api/routers/addresses.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.errors import http_error
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import Address, AddressIn
from storefront.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


def get_service(db: Session):
    return AddressService(db)


@router.get("", response_model=list[Address])
def list_addresses(user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.list_addresses(user_id)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)


@router.post("", response_model=Address, status_code=201)
def add_address(payload: AddressIn, user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_address(user_id, payload)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)


@router.post("/{address_id}/default", response_model=Address)
def set_default(address_id: str, user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.set_default(user_id, address_id)
    except (StorefrontError, SQLAlchemyError) as e:
        raise http_error(e)
