import logging
from typing import List, Tuple

from group_dining.application.order_ledger import OrderLedger
from group_dining.domain.models import BillSummary, Order, OrderStatus, status_text

logger = logging.getLogger(__name__)


def summarize(orders: List[Order]) -> BillSummary:
    """
    Roll orders up into a bill in one pass.
    Every order counts towards the overall, per-person, per-category and
    per-status totals; the served/pending/cancelled split depends on status.
    """
    bill = BillSummary()

    for order in orders:
        price = order.total_price
        bill.total_items += order.quantity
        bill.total_amount += price
        bill.by_person[order.user_name] = bill.by_person.get(order.user_name, 0) + price
        bill.by_category[order.category] = bill.by_category.get(order.category, 0) + price
        status = status_text(order.status)
        bill.by_status[status] = bill.by_status.get(status, 0) + price

        if order.status is OrderStatus.SERVED:
            bill.served_amount += price
        elif order.status is OrderStatus.ORDERED:
            bill.pending_amount += price
        elif order.status is OrderStatus.NOT_AVAILABLE:
            bill.cancelled_amount += price
        # any other status only shows up in by_status

    return bill


class BillAggregator:
    def __init__(self, ledger: OrderLedger):
        self.ledger = ledger

    def compute_bill(self, session_id: str) -> Tuple[BillSummary, List[Order]]:
        orders = self.ledger.list_orders(session_id)
        bill = summarize(orders)
        logger.debug(f"Bill for {session_id}: {bill.total_items} items, total {bill.total_amount}")
        return bill, orders
