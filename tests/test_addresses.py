import pytest

from storefront.client.addresses import AddressBook
from storefront.domain.addresses import validate_address
from storefront.domain.errors import NotAuthorized, NotFound, ValidationError
from storefront.domain.schemas import AddressIn

from tests.conftest import OTHER_USER, USER


@pytest.fixture
def book(remote):
    return AddressBook(remote, USER)


def test_first_address_becomes_default(book, home_address):
    first = book.add(home_address)
    second = book.add(AddressIn(**{**home_address.model_dump(), "full_address": "7 Lake View"}))

    assert first.is_default
    assert not second.is_default
    assert book.default().id == first.id


def test_set_default_moves_the_flag(book, home_address):
    first = book.add(home_address)
    second = book.add(AddressIn(**{**home_address.model_dump(), "full_address": "7 Lake View"}))

    book.set_default(second.id)

    flags = {a.id: a.is_default for a in book.addresses()}
    assert flags == {first.id: False, second.id: True}
    assert book.addresses()[0].id == second.id


def test_no_addresses(book):
    assert book.addresses() == []
    assert book.default() is None


@pytest.mark.parametrize("field", ["full_address", "city", "state", "pincode"])
def test_required_fields(book, home_address, field):
    payload = AddressIn(**{**home_address.model_dump(), field: "  "})
    with pytest.raises(ValidationError):
        book.add(payload)
    assert book.addresses() == []


@pytest.mark.parametrize("pincode", ["56000", "5600011", "56OO01"])
def test_pincode_must_be_six_digits(home_address, pincode):
    with pytest.raises(ValidationError):
        validate_address(AddressIn(**{**home_address.model_dump(), "pincode": pincode}))


def test_addresses_are_private(remote, book, home_address):
    mine = book.add(home_address)
    theirs = AddressBook(remote, OTHER_USER)

    assert theirs.addresses() == []
    with pytest.raises(NotAuthorized):
        theirs.set_default(mine.id)
    with pytest.raises(NotFound):
        theirs.set_default("missing")
