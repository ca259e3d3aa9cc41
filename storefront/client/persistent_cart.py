# storefront/client/persistent_cart.py
from storefront.client.cart import Cart, build_line, check_quantity, serialized
from storefront.client.remote import StoreRemote
from storefront.domain.schemas import CartLine
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class PersistentCartService(Cart):
    """
    Koszyk zalogowanego usera - proxy do remote store.
    Snapshot w pamieci zmienia sie tylko po udanym fetch(), wiec blad
    mutacji zostawia ostatni dobry stan, a wyjatek idzie do wolajacego.
    """

    def __init__(self, remote: StoreRemote, user_id: str):
        super().__init__()
        self.remote = remote
        self.user_id = user_id

    @serialized
    def fetch(self) -> list[CartLine]:
        lines = self.remote.fetch_lines(self.user_id)
        self._lines = lines
        self._publish()
        return self.lines

    def refresh(self) -> list[CartLine]:
        return self.fetch()

    @serialized
    def add(self, product, service, quantity: int = 1) -> CartLine:
        draft = build_line(product, service, quantity)

        # remote robi upsert po (produkt, usluga)
        line = self.remote.add_line(self.user_id, draft)
        logger.info(f"User {self.user_id}: line {line.id} now x{line.quantity}")

        self.fetch()
        return line

    @serialized
    def set_quantity(self, line_id: str, quantity: int) -> CartLine | None:
        if check_quantity(quantity) <= 0:
            self.remove(line_id)
            return None

        line = self.remote.update_line(self.user_id, line_id, quantity)
        self.fetch()
        return line

    @serialized
    def remove(self, line_id: str) -> None:
        self.remote.delete_line(self.user_id, line_id)
        self.fetch()

    @serialized
    def clear(self) -> None:
        self.remote.delete_all_lines(self.user_id)
        self.mark_cleared()

    @serialized
    def mark_cleared(self) -> None:
        """Remote juz wyczyscil koszyk (np. commit zamowienia)."""
        self._lines = []
        self._publish()
