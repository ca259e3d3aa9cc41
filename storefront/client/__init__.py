# storefront/client/__init__.py
from storefront.client.active_cart import ActiveCart
from storefront.client.addresses import AddressBook
from storefront.client.checkout import CheckoutSession, OrderPlacementService
from storefront.client.http_remote import HttpStoreRemote
from storefront.client.merge import CartMergeEngine
from storefront.client.persistent_cart import PersistentCartService
from storefront.client.session_cart import SessionCartStore
from storefront.client.storage import JsonFileStorage, MemoryStorage

__all__ = [
    "ActiveCart",
    "AddressBook",
    "CartMergeEngine",
    "CheckoutSession",
    "HttpStoreRemote",
    "JsonFileStorage",
    "MemoryStorage",
    "OrderPlacementService",
    "PersistentCartService",
    "SessionCartStore",
]
