import logging
from typing import List

from group_dining.domain.cells import cell_at, is_blank, to_bool, to_decimal, to_int, to_text
from group_dining.domain.errors import NotFound
from group_dining.domain.models import MENU_TABLE, MenuItem
from group_dining.interfaces.ITableStore import ITableStore

logger = logging.getLogger(__name__)


def menu_item_from_row(row: list) -> MenuItem:
    return MenuItem(
        id=to_int(cell_at(row, 0)),
        category=to_text(cell_at(row, 1)),
        name=to_text(cell_at(row, 2)),
        price=to_decimal(cell_at(row, 3)),
        description=to_text(cell_at(row, 4)),
        vegetarian=to_bool(cell_at(row, 5)),
        available=to_bool(cell_at(row, 6), default=True),
    )


class MenuReader:
    def __init__(self, store: ITableStore):
        self.store = store

    def load_menu(self) -> List[MenuItem]:
        """
        Menu items in sheet order.
        Rows without an id are padding and are skipped.
        """
        rows = self.store.get_all_rows(MENU_TABLE)
        items = [menu_item_from_row(row) for row in rows[1:] if not is_blank(cell_at(row, 0))]
        logger.debug(f"Loaded {len(items)} menu items")
        return items

    def find_item(self, item_id: int) -> MenuItem:
        for item in self.load_menu():
            if item.id == item_id:
                return item
        raise NotFound(f"Menu item {item_id} not found")
