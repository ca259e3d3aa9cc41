# storefront/client/merge.py
import threading

from storefront.client.persistent_cart import PersistentCartService
from storefront.client.session_cart import SessionCartStore
from storefront.domain.errors import MergeInProgress, StorefrontError
from storefront.domain.schemas import CartLineIn, MergeResult
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# merge tego samego usera nie moze biec dwa razy naraz
_in_flight: set[str] = set()
_in_flight_lock = threading.Lock()


class CartMergeEngine:
    """
    Jednorazowe wlanie koszyka sesyjnego do trwalego po zalogowaniu.

    Kazda linia sesyjna jest usuwana z koszyka sesyjnego zaraz po udanym
    zapisie w remote store, wiec przerwany merge zostawia w sesji dokladnie
    te linie, ktorych jeszcze nie przeniesiono, a ponowienie nic nie dubluje.
    """

    def __init__(self, session_cart: SessionCartStore, persistent_cart: PersistentCartService):
        self.session_cart = session_cart
        self.persistent_cart = persistent_cart

    def merge(self) -> MergeResult:
        user_id = self.persistent_cart.user_id
        result = MergeResult()

        if self.session_cart.is_empty():
            return result

        with _in_flight_lock:
            if user_id in _in_flight:
                raise MergeInProgress(f"Cart merge for user {user_id} already running")
            _in_flight.add(user_id)

        try:
            self._merge_lines(user_id, result)
        except StorefrontError as e:
            logger.warning(
                f"Merge for user {user_id} stopped after {result.updated + result.inserted} lines, "
                f"{len(self.session_cart.lines)} left in session cart: {e}"
            )
            raise
        finally:
            with _in_flight_lock:
                _in_flight.discard(user_id)

        logger.info(f"Merge for user {user_id} done: {result.updated} updated, {result.inserted} inserted")
        return result

    def _merge_lines(self, user_id: str, result: MergeResult) -> None:
        remote = self.persistent_cart.remote
        persistent = {line.key: line for line in self.persistent_cart.fetch()}

        for line in self.session_cart.lines:
            match = persistent.get(line.key)

            if match:
                # total liczy remote z zapisanych cen jednostkowych
                merged = remote.update_line(user_id, match.id, match.quantity + line.quantity)
                result.updated += 1
            else:
                # bez lokalnego id, remote nada swoje
                merged = remote.add_line(user_id, CartLineIn(**line.fields()))
                result.inserted += 1

            persistent[line.key] = merged
            self.session_cart.remove(line.id)

        # wszystko przeniesione - czyscimy sesje i odswiezamy snapshot
        self.session_cart.clear()
        self.persistent_cart.fetch()
