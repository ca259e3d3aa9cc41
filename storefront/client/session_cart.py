# storefront/client/session_cart.py
import json
import secrets
import time

from storefront.client.cart import Cart, build_line, check_quantity, serialized
from storefront.client.storage import JsonFileStorage
from storefront.domain.schemas import CartLine
from storefront.utils.logging import get_logger
from storefront.utils.settings import SESSION_CART_KEY, SESSION_CART_PATH

logger = get_logger(__name__)

SESSION_PREFIX = "session-"


class SessionCartStore(Cart):
    """
    Koszyk goscia trzymany tylko na urzadzeniu.
    Cala lista linii jest zapisywana do local storage po kazdej mutacji
    i wczytywana raz przy starcie.
    """

    def __init__(self, storage=None, key: str = SESSION_CART_KEY, clock=time.time):
        super().__init__()
        self.storage = storage if storage is not None else JsonFileStorage(SESSION_CART_PATH)
        self.key = key
        self.clock = clock
        self._lines = self._load()

    def refresh(self) -> list[CartLine]:
        with self._write_lock:
            self._lines = self._load()
        self._publish()
        return self.lines

    @serialized
    def add(self, product, service, quantity: int = 1) -> CartLine:
        draft = build_line(product, service, quantity)
        existing = self.find(draft.product_name, draft.service_type)

        if existing:
            logger.info(
                f"Session line {existing.id} already in cart, quantity "
                f"{existing.quantity} -> {existing.quantity + quantity}"
            )
            line = existing.model_copy(update={"quantity": existing.quantity + quantity})
            self._replace(line)
        else:
            line = CartLine(id=self._new_id(), **draft.fields())
            self._lines.append(line)
            logger.info(f"Session line {line.id} added: {line.product_name} / {line.service_type}")

        self._commit()
        return line

    @serialized
    def set_quantity(self, line_id: str, quantity: int) -> CartLine | None:
        if check_quantity(quantity) <= 0:
            self.remove(line_id)
            return None

        line = self.get_line(line_id).model_copy(update={"quantity": quantity})
        self._replace(line)
        self._commit()
        return line

    @serialized
    def remove(self, line_id: str) -> None:
        line = self.get_line(line_id)
        self._lines = [l for l in self._lines if l.id != line.id]
        logger.info(f"Session line {line_id} removed")
        self._commit()

    @serialized
    def clear(self) -> None:
        self._lines = []
        self._commit()

    def _replace(self, line: CartLine) -> None:
        self._lines = [line if l.id == line.id else l for l in self._lines]

    def _commit(self) -> None:
        self._persist()
        self._publish()

    def _new_id(self) -> str:
        # czas + losowa czesc, prefiks odroznia od id z remote store
        return f"{SESSION_PREFIX}{int(self.clock() * 1000)}-{secrets.token_hex(4)}"

    def _persist(self) -> None:
        if not self._lines:
            self.storage.remove_item(self.key)
            return

        blob = json.dumps([line.model_dump(mode="json") for line in self._lines])
        self.storage.set_item(self.key, blob)

    def _load(self) -> list[CartLine]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []

        try:
            lines = [CartLine.model_validate(item) for item in json.loads(raw)]
        except (ValueError, TypeError) as e:  # pydantic ValidationError to tez ValueError
            # uszkodzony blob = pusty koszyk, nie blad
            logger.warning(f"Discarding unreadable session cart: {e}")
            self.storage.remove_item(self.key)
            return []

        logger.info(f"Session cart loaded with {len(lines)} lines")
        return lines
