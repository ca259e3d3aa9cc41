from decimal import Decimal

import pytest

from storefront.client.persistent_cart import PersistentCartService
from storefront.data.database import Base
from storefront.domain.errors import InvalidQuantity, NotAuthorized, NotFound, RemoteUnavailable

from tests.conftest import OTHER_USER, USER, FlakyRemote


@pytest.fixture
def cart(remote):
    return PersistentCartService(remote, USER)


def test_add_and_fetch(cart, shirt, steam_iron):
    line = cart.add(shirt, steam_iron, 2)

    assert line.line_total == Decimal("120")
    assert [l.id for l in cart.lines] == [line.id]
    assert cart.fetch()[0].quantity == 2


def test_add_same_pair_upserts(cart, shirt, steam_iron):
    cart.add(shirt, steam_iron, 1)
    line = cart.add(shirt, steam_iron, 2)

    assert len(cart.lines) == 1
    assert line.quantity == 3
    assert line.line_total == Decimal("180")


def test_set_quantity(cart, shirt, steam_iron):
    line = cart.add(shirt, steam_iron)
    updated = cart.set_quantity(line.id, 5)

    assert updated.quantity == 5
    assert updated.line_total == Decimal("300")
    assert cart.lines[0].line_total == Decimal("300")


def test_set_quantity_zero_removes(cart, shirt, steam_iron):
    line = cart.add(shirt, steam_iron)

    assert cart.set_quantity(line.id, 0) is None
    assert cart.is_empty()


def test_set_quantity_rejects_non_integer(cart, shirt, steam_iron):
    line = cart.add(shirt, steam_iron)
    with pytest.raises(InvalidQuantity):
        cart.set_quantity(line.id, 2.5)


def test_remove_and_clear(cart, shirt, saree, steam_iron):
    first = cart.add(shirt, steam_iron)
    cart.add(saree, steam_iron)

    cart.remove(first.id)
    assert [l.product_name for l in cart.lines] == ["Saree"]

    cart.clear()
    assert cart.is_empty()
    assert cart.fetch() == []


def test_remove_missing_line(cart):
    with pytest.raises(NotFound):
        cart.remove("missing")


def test_other_users_line_is_off_limits(remote, cart, shirt, steam_iron):
    line = cart.add(shirt, steam_iron)
    intruder = PersistentCartService(remote, OTHER_USER)

    with pytest.raises(NotAuthorized):
        intruder.set_quantity(line.id, 9)
    assert cart.fetch()[0].quantity == 1


def test_carts_are_per_user(remote, cart, shirt, steam_iron):
    cart.add(shirt, steam_iron)
    assert PersistentCartService(remote, OTHER_USER).fetch() == []


def test_failed_write_keeps_last_snapshot(remote, shirt, saree, steam_iron):
    cart = PersistentCartService(FlakyRemote(remote, fail_on_write=2), USER)
    cart.add(shirt, steam_iron)
    before = cart.lines

    with pytest.raises(RemoteUnavailable):
        cart.add(saree, steam_iron)

    assert cart.lines == before


def test_database_errors_are_classified(engine, remote, cart):
    Base.metadata.drop_all(engine)

    with pytest.raises(RemoteUnavailable):
        cart.fetch()
    assert cart.lines == []


def test_mark_cleared_notifies(cart, shirt, steam_iron):
    seen = []
    cart.add(shirt, steam_iron)
    cart.subscribe(seen.append)

    cart.mark_cleared()

    assert seen == [[]]
