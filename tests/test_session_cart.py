from decimal import Decimal

import pytest

from storefront.client.session_cart import SessionCartStore
from storefront.client.storage import MemoryStorage
from storefront.domain.errors import InvalidQuantity, NotFound, ValidationError
from storefront.utils.settings import SESSION_CART_KEY


def test_same_product_and_service_merge_into_one_line(session_cart, shirt, steam_iron):
    session_cart.add(shirt, steam_iron, 1)
    line = session_cart.add(shirt, steam_iron, 2)

    assert len(session_cart.lines) == 1
    assert line.quantity == 3
    assert line.line_total == Decimal("180")
    assert session_cart.count == 3


def test_different_service_is_a_new_line(session_cart, shirt, steam_iron, dry_clean):
    session_cart.add(shirt, steam_iron)
    session_cart.add(shirt, dry_clean)

    assert len(session_cart.lines) == 2
    assert session_cart.subtotal == Decimal("200")


def test_line_ids_are_session_prefixed(session_cart, shirt, steam_iron):
    line = session_cart.add(shirt, steam_iron)
    assert line.id.startswith("session-")


def test_catalog_dicts_are_accepted(session_cart):
    line = session_cart.add(
        {"name": "Kurta", "image_url": "kurta.png", "product_price": "60"},
        {"name": "Wash & Fold", "price": "15"},
    )

    assert line.product_name == "Kurta"
    assert line.product_image == "kurta.png"
    assert line.line_total == Decimal("75")


@pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
def test_add_rejects_bad_quantity(session_cart, shirt, steam_iron, quantity):
    with pytest.raises(InvalidQuantity):
        session_cart.add(shirt, steam_iron, quantity)
    assert session_cart.is_empty()


def test_add_rejects_negative_price(session_cart, steam_iron):
    with pytest.raises(ValidationError):
        session_cart.add({"product_name": "Shirt", "product_price": "-1"}, steam_iron)
    assert session_cart.is_empty()


@pytest.mark.parametrize("product_price, service_price", [("0.335", "0"), ("10", "0.333")])
def test_add_rejects_sub_paisa_prices(session_cart, product_price, service_price):
    with pytest.raises(ValidationError):
        session_cart.add(
            {"product_name": "Hanky", "product_price": product_price},
            {"name": "Wash", "price": service_price},
        )
    assert session_cart.is_empty()


def test_set_quantity_recomputes_total(session_cart, shirt, steam_iron):
    line = session_cart.add(shirt, steam_iron)
    updated = session_cart.set_quantity(line.id, 4)

    assert updated.quantity == 4
    assert updated.line_total == Decimal("240")


def test_set_quantity_zero_removes_line(session_cart, storage, shirt, steam_iron):
    line = session_cart.add(shirt, steam_iron)

    assert session_cart.set_quantity(line.id, 0) is None
    assert session_cart.is_empty()
    # pusty koszyk nie zostawia klucza
    assert storage.get_item(SESSION_CART_KEY) is None


def test_unknown_line(session_cart):
    with pytest.raises(NotFound):
        session_cart.set_quantity("session-1-deadbeef", 2)
    with pytest.raises(NotFound):
        session_cart.remove("session-1-deadbeef")


def test_survives_restart(storage, shirt, steam_iron, dry_clean):
    first = SessionCartStore(storage=storage)
    first.add(shirt, steam_iron, 2)
    first.add(shirt, dry_clean)

    second = SessionCartStore(storage=storage)
    assert [l.id for l in second.lines] == [l.id for l in first.lines]
    assert second.subtotal == Decimal("260")


def test_corrupt_blob_is_discarded():
    storage = MemoryStorage()
    storage.set_item(SESSION_CART_KEY, "{not json")

    cart = SessionCartStore(storage=storage)

    assert cart.is_empty()
    assert storage.get_item(SESSION_CART_KEY) is None


def test_blob_with_invalid_lines_is_discarded():
    storage = MemoryStorage()
    storage.set_item(SESSION_CART_KEY, '[{"id": "x", "quantity": 0}]')

    assert SessionCartStore(storage=storage).is_empty()


def test_subscribers_get_snapshots(session_cart, shirt, steam_iron):
    seen = []
    unsubscribe = session_cart.subscribe(lambda lines: seen.append(len(lines)))

    line = session_cart.add(shirt, steam_iron)
    session_cart.remove(line.id)
    unsubscribe()
    session_cart.add(shirt, steam_iron)

    assert seen == [1, 0]


def test_failing_listener_does_not_undo_change(session_cart, shirt, steam_iron):
    def broken(lines):
        raise RuntimeError("view crashed")

    session_cart.subscribe(broken)
    session_cart.add(shirt, steam_iron)

    assert len(session_cart.lines) == 1


def test_clear(session_cart, storage, shirt, steam_iron, dry_clean):
    session_cart.add(shirt, steam_iron)
    session_cart.add(shirt, dry_clean)
    session_cart.clear()

    assert session_cart.is_empty()
    assert storage.get_item(SESSION_CART_KEY) is None
