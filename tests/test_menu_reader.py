from decimal import Decimal

import pytest

from group_dining.application.menu_reader import MenuReader
from group_dining.domain.errors import NotFound, StoreUnavailable
from group_dining.domain.models import MENU_TABLE
from group_dining.init_database import SAMPLE_MENU, seed_sample_menu


def add_rows(store, *rows):
    for row in rows:
        store.append_row(MENU_TABLE, list(row))


def test_one_item_per_row_with_an_id_in_row_order(store, menu_reader):
    add_rows(
        store,
        (3, "Mains", "Curry", 14.5, "", True, True),
        ("", "", "", "", "", "", ""),
        (1, "Drinks", "Tea", "4.50", "Hot", False, True),
        (None, "Mains", "Ghost", 1, "", "", ""),
        (2, "Starters", "Rolls", 6, "", "", ""),
    )

    items = menu_reader.load_menu()

    assert [i.id for i in items] == [3, 1, 2]
    assert [i.name for i in items] == ["Curry", "Tea", "Rolls"]


def test_empty_cells_default_available_true_and_vegetarian_false(store, menu_reader):
    add_rows(store, (1, "Mains", "Curry", 10, "", "", ""))

    item = menu_reader.load_menu()[0]

    assert item.available is True
    assert item.vegetarian is False


def test_short_rows_are_padded(store, menu_reader):
    add_rows(store, (1, "Mains", "Curry", 10))

    item = menu_reader.load_menu()[0]

    assert item.description == ""
    assert item.available is True


@pytest.mark.parametrize("cell,expected", [
    (True, True),
    ("TRUE", True),
    ("true", True),
    (False, False),
    ("FALSE", False),
    ("yes", False),
    ("True", False),
])
def test_boolean_cells_are_tolerant(store, menu_reader, cell, expected):
    add_rows(store, (1, "Mains", "Curry", 10, "", cell, cell))

    item = menu_reader.load_menu()[0]

    assert item.vegetarian is expected
    assert item.available is expected


@pytest.mark.parametrize("cell,expected", [
    ("4.50", Decimal("4.50")),
    (12, Decimal("12")),
    (3.25, Decimal("3.25")),
    ("", Decimal("0")),
])
def test_price_is_coerced_to_decimal(store, menu_reader, cell, expected):
    add_rows(store, (1, "Drinks", "Tea", cell, "", "", ""))

    assert menu_reader.load_menu()[0].price == expected


def test_unparseable_price_raises(store, menu_reader):
    add_rows(store, (1, "Drinks", "Tea", "free", "", "", ""))

    with pytest.raises(ValueError):
        menu_reader.load_menu()


def test_missing_menu_table(bare_store):
    with pytest.raises(StoreUnavailable):
        MenuReader(bare_store).load_menu()


def test_sample_menu_loads(store, menu_reader):
    assert seed_sample_menu(store) == len(SAMPLE_MENU)
    assert seed_sample_menu(store) == 0

    items = menu_reader.load_menu()
    assert len(items) == len(SAMPLE_MENU)
    assert items[-1].name == "Lemonade"
    assert items[-1].available is True


def test_find_item(store, menu_reader):
    add_rows(store, (7, "Drinks", "Tea", "4.50", "", "", ""))

    assert menu_reader.find_item(7).name == "Tea"
    with pytest.raises(NotFound):
        menu_reader.find_item(8)


def test_whitespace_availability_is_not_empty(store, menu_reader):
    add_rows(store, (1, "Mains", "Curry", 10, "", "  ", "  "))

    item = menu_reader.load_menu()[0]

    assert item.available is False
    assert item.vegetarian is False
