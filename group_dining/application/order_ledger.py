import logging
from typing import List, Optional

from group_dining.domain.cells import (
    cell_at, to_datetime, to_decimal, to_int, to_text,
)
from group_dining.domain.errors import NotFound
from group_dining.domain.models import (
    ORDER_COLUMNS, ORDERS_TABLE, NewOrder, Order, OrderStatus, column_number,
    parse_order_status,
)
from group_dining.infrastructure.clock import Clock
from group_dining.interfaces.IIdGenerator import IIdGenerator
from group_dining.interfaces.ITableStore import ITableStore

logger = logging.getLogger(__name__)

STATUS_COL = column_number(ORDER_COLUMNS, "status")
SERVED_TIME_COL = column_number(ORDER_COLUMNS, "servedTime")
NOTES_COL = column_number(ORDER_COLUMNS, "notes")


def order_from_row(row: list, row_index: int) -> Order:
    return Order(
        order_id=to_text(cell_at(row, 0)),
        session_id=to_text(cell_at(row, 1)),
        user_name=to_text(cell_at(row, 2)),
        item_id=to_int(cell_at(row, 3)),
        item_name=to_text(cell_at(row, 4)),
        category=to_text(cell_at(row, 5)),
        quantity=to_int(cell_at(row, 6)),
        price_per_item=to_decimal(cell_at(row, 7)),
        total_price=to_decimal(cell_at(row, 8)),
        status=parse_order_status(to_text(cell_at(row, 9))),
        order_time=to_datetime(cell_at(row, 10)),
        served_time=to_datetime(cell_at(row, 11)),
        notes=to_text(cell_at(row, 12)),
        row_index=row_index,
    )


class OrderLedger:
    """Order line items for dining sessions, one row per item ordered."""

    def __init__(self, store: ITableStore, id_generator: IIdGenerator, clock: Clock):
        self.store = store
        self.id_generator = id_generator
        self.clock = clock

    def add_order(self, new_order: NewOrder) -> str:
        """
        Append an order exactly as supplied. The item is not checked against
        the menu: the caller provides the denormalized name, category and price.
        """
        order_id = self.id_generator.order_id()
        self.store.append_row(ORDERS_TABLE, [
            order_id,
            new_order.session_id,
            new_order.user_name,
            new_order.item_id,
            new_order.item_name,
            new_order.category,
            new_order.quantity,
            new_order.price_per_item,
            new_order.total_price,
            OrderStatus.ORDERED,
            self.clock(),
            "",  # served time
            "",  # notes
        ])
        logger.info(
            f"Order {order_id} added: {new_order.quantity}x {new_order.item_name} "
            f"for {new_order.user_name} ({new_order.session_id})"
        )
        return order_id

    def list_orders(self, session_id: str) -> List[Order]:
        rows = self.store.get_all_rows(ORDERS_TABLE)
        orders = [
            order_from_row(row, i + 1)
            for i, row in enumerate(rows)
            if i > 0 and cell_at(row, 1) == session_id
        ]
        logger.debug(f"Found {len(orders)} orders for {session_id}")
        return orders

    def update_status(self, order_id: str, new_status: OrderStatus, notes: Optional[str] = None) -> None:
        row_index = self._find_row(order_id)
        new_status = OrderStatus(new_status)

        self.store.set_cell(ORDERS_TABLE, row_index, STATUS_COL, new_status)

        # servedTime is only ever stamped, never cleared
        if new_status is OrderStatus.SERVED:
            self.store.set_cell(ORDERS_TABLE, row_index, SERVED_TIME_COL, self.clock())

        if notes:
            self.store.set_cell(ORDERS_TABLE, row_index, NOTES_COL, notes)

        logger.info(f"Order {order_id} status updated to {new_status.value}")

    def delete_order(self, order_id: str) -> None:
        row_index = self._find_row(order_id)
        self.store.delete_row(ORDERS_TABLE, row_index)
        logger.info(f"Order {order_id} deleted")

    def _find_row(self, order_id: str) -> int:
        rows = self.store.get_all_rows(ORDERS_TABLE)
        for i in range(1, len(rows)):
            if cell_at(rows[i], 0) == order_id:
                return i + 1
        raise NotFound("Order not found")
