# storefront/domain/schemas.py
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field

from storefront.domain.pricing import line_total


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class AddressType(str, Enum):
    HOME = "home"
    WORK = "work"
    OTHER = "other"


class DeliverySlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


DELIVERY_SLOT_WINDOWS = {
    DeliverySlot.MORNING: "9:00 AM - 12:00 PM",
    DeliverySlot.AFTERNOON: "12:00 PM - 6:00 PM",
    DeliverySlot.EVENING: "6:00 PM - 9:00 PM",
}


class PaymentStatus(str, Enum):
    PENDING = "pending"


class OrderStatus(str, Enum):
    CONFIRMED = "confirmed"
    NEEDS_REVIEW = "needs_review"


# ---------------------------------------------------------------
# wybor z katalogu
# ---------------------------------------------------------------

class ProductIn(BaseModel):
    """Produkt wybrany z katalogu (katalog jest poza tym modulem)."""

    product_name: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("product_name", "name")
    )
    product_image: Optional[str] = Field(
        None, validation_alias=AliasChoices("product_image", "image_url")
    )
    product_price: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    category: str = "general"


class ServiceIn(BaseModel):
    """Sposob obrobki (pranie, prasowanie parowe...) z doplata."""

    name: str = Field(..., min_length=1)
    price: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)


# ---------------------------------------------------------------
# koszyk
# ---------------------------------------------------------------

class CartLineIn(BaseModel):
    """Pola linii koszyka bez identyfikatora - payload dodania."""

    product_name: str = Field(..., min_length=1)
    product_image: Optional[str] = None
    # grosze jak w kolumnach Numeric(10, 2), koszyk sesyjny i trwaly licza tak samo
    product_price: Decimal = Field(..., ge=0, decimal_places=2)
    service_type: str = Field(..., min_length=1)
    service_price: Decimal = Field(..., ge=0, decimal_places=2)
    quantity: int = Field(1, ge=1)
    category: Optional[str] = "general"

    @computed_field
    @property
    def line_total(self) -> Decimal:
        # zawsze liczone z pol, nie da sie go rozjechac
        return line_total(self.product_price, self.service_price, self.quantity)

    @property
    def key(self) -> tuple[str, str]:
        return (self.product_name, self.service_type)

    @classmethod
    def from_selection(cls, product: ProductIn, service: ServiceIn, quantity: int) -> "CartLineIn":
        return cls(
            product_name=product.product_name,
            product_image=product.product_image,
            product_price=product.product_price,
            service_type=service.name,
            service_price=service.price,
            quantity=quantity,
            category=product.category or "general",
        )

    def fields(self) -> Dict[str, Any]:
        return self.model_dump(include=set(CartLineIn.model_fields))


class CartLine(CartLineIn):
    id: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class QuantityIn(BaseModel):
    quantity: int = Field(..., ge=1)


class MergeResult(BaseModel):
    updated: int = 0
    inserted: int = 0


# ---------------------------------------------------------------
# kupony
# ---------------------------------------------------------------

class Coupon(BaseModel):
    code: str
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: Decimal = Field(..., ge=0)
    max_discount_amount: Optional[Decimal] = None
    minimum_order_value: Optional[Decimal] = None
    min_items: Optional[int] = None
    is_active: bool = True
    is_featured: bool = False
    expiry_date: Optional[datetime] = None
    usage_limit: Optional[int] = None
    usage_count: int = 0

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------
# adresy
# ---------------------------------------------------------------

class AddressIn(BaseModel):
    address_type: AddressType = AddressType.HOME
    full_address: str = ""
    landmark: Optional[str] = None
    city: str = ""
    state: str = ""
    pincode: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Address(AddressIn):
    id: str
    is_default: bool = False

    model_config = ConfigDict(from_attributes=True)


class AddressSnapshot(BaseModel):
    """Kopia adresu zapisana w zamowieniu - edycja adresu jej nie zmienia."""

    full_address: str
    landmark: Optional[str] = None
    city: str
    state: str
    pincode: str
    address_type: AddressType

    @classmethod
    def of(cls, address: AddressIn) -> "AddressSnapshot":
        return cls(
            full_address=address.full_address,
            landmark=address.landmark,
            city=address.city,
            state=address.state,
            pincode=address.pincode,
            address_type=address.address_type,
        )


# ---------------------------------------------------------------
# zamowienia
# ---------------------------------------------------------------

class OrderLine(BaseModel):
    """Snapshot linii koszyka w momencie zamowienia."""

    product_name: str
    product_price: Decimal
    service_type: str
    service_price: Decimal
    quantity: int = Field(..., ge=1)
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def of(cls, line: CartLine) -> "OrderLine":
        return cls(
            product_name=line.product_name,
            product_price=line.product_price,
            service_type=line.service_type,
            service_price=line.service_price,
            quantity=line.quantity,
            line_total=line.line_total,
        )


class OrderDraft(BaseModel):
    """Cale zamowienie przygotowane po stronie klienta, commitowane jednym wywolaniem."""

    id: str = Field(..., min_length=1, max_length=40)
    total_amount: Decimal = Field(..., ge=0)
    payment_method: str
    delivery_slot: DeliverySlot
    pickup_date: date
    delivery_date: date
    delivery_address: str
    address_details: AddressSnapshot
    applied_coupon_code: Optional[str] = None
    discount_amount: Decimal = Decimal("0")
    lines: List[OrderLine] = Field(..., min_length=1)


class Order(BaseModel):
    id: str
    user_id: str
    total_amount: Decimal
    payment_method: str
    payment_status: PaymentStatus
    order_status: OrderStatus
    pickup_date: date
    delivery_date: date
    delivery_slot: DeliverySlot
    delivery_address: str
    address_details: AddressSnapshot
    applied_coupon_code: Optional[str] = None
    discount_amount: Decimal = Decimal("0")
    created_at: Optional[datetime] = None
    lines: List[OrderLine] = []

    model_config = ConfigDict(from_attributes=True)
