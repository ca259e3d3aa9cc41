#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.cart_line import CartLineModel
from storefront.data.models.coupon import CouponModel
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_line import OrderLineModel

__all__ = ["CartLineModel", "CouponModel", "AddressModel", "OrderModel", "OrderLineModel"]
