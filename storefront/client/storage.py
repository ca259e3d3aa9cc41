# storefront/client/storage.py
import json
import os
import tempfile

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class MemoryStorage:
    """Local storage w pamieci - testy i klienci bez dysku."""

    def __init__(self):
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """
    Trwaly local storage klienta: jeden plik JSON klucz -> string.
    Przezywa restart, nie synchronizuje sie miedzy urzadzeniami.
    """

    def __init__(self, path: str):
        self.path = path

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, encoding="utf-8") as fh:
                items = json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning(f"Local storage {self.path} unreadable, starting empty: {e}")
            return {}

        if not isinstance(items, dict):
            logger.warning(f"Local storage {self.path} is not a key/value map, starting empty")
            return {}
        return items

    def _write(self, items: dict) -> None:
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)

        # zapis przez plik tymczasowy + replace, zeby nie zostawic polowy pliku
        fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise
