# storefront/client/active_cart.py
from storefront.client.cart import Cart
from storefront.client.merge import CartMergeEngine
from storefront.client.persistent_cart import PersistentCartService
from storefront.client.remote import StoreRemote
from storefront.client.session_cart import SessionCartStore
from storefront.domain.schemas import MergeResult
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ActiveCart:
    """
    Wybiera implementacje koszyka raz na tozsamosc: gosc -> SessionCartStore,
    zalogowany -> PersistentCartService. Przejscie gosc -> zalogowany
    uruchamia merge dokladnie raz.
    """

    def __init__(self, session_cart: SessionCartStore, remote: StoreRemote):
        self.session_cart = session_cart
        self.remote = remote
        self.user_id: str | None = None
        self.cart: Cart = session_cart

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def sign_in(self, user_id: str) -> MergeResult:
        if self.user_id == user_id:
            return MergeResult()

        persistent = PersistentCartService(self.remote, user_id)
        # przelaczamy od razu - nieudany merge zostawia linie w sesji do ponowienia
        self.user_id = user_id
        self.cart = persistent

        logger.info(f"User {user_id} signed in, switching to persistent cart")

        if self.session_cart.is_empty():
            persistent.fetch()
            return MergeResult()

        return CartMergeEngine(self.session_cart, persistent).merge()

    def retry_merge(self) -> MergeResult:
        if not isinstance(self.cart, PersistentCartService):
            return MergeResult()
        return CartMergeEngine(self.session_cart, self.cart).merge()

    def sign_out(self) -> None:
        logger.info(f"User {self.user_id} signed out, back to session cart")
        self.user_id = None
        self.cart = self.session_cart
