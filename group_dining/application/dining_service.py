import functools
import logging
from typing import Any, Dict, Optional

from group_dining.application.bill_aggregator import BillAggregator
from group_dining.application.menu_reader import MenuReader
from group_dining.application.order_ledger import OrderLedger
from group_dining.application.session_manager import SessionManager
from group_dining.domain.errors import DiningError, Unexpected
from group_dining.domain.models import NewOrder, OrderStatus

logger = logging.getLogger(__name__)

Envelope = Dict[str, Any]


def failure(error: DiningError) -> Envelope:
    return {"success": False, "error": error.message, "errorType": error.kind}


def envelope(operation):
    """
    Run an operation and wrap its payload as {"success": True, ...}.
    Any failure comes back as {"success": False, "error": ...} instead of raising.
    """
    @functools.wraps(operation)
    def wrapper(*args, **kwargs) -> Envelope:
        try:
            payload = operation(*args, **kwargs)
        except DiningError as e:
            logger.warning(f"{operation.__name__} failed ({e.kind}): {e.message}")
            return failure(e)
        except Exception as e:
            logger.error(f"Error in {operation.__name__}: {e}", exc_info=True)
            return failure(Unexpected(str(e)))
        return {"success": True, **payload}

    return wrapper


def _dump(record) -> Dict[str, Any]:
    return record.model_dump(by_alias=True)


class DiningService:
    """The operations exposed to the UI. Every call returns an envelope."""

    def __init__(
        self,
        menu_reader: MenuReader,
        session_manager: SessionManager,
        order_ledger: OrderLedger,
        bill_aggregator: BillAggregator,
    ):
        self.menu_reader = menu_reader
        self.session_manager = session_manager
        self.order_ledger = order_ledger
        self.bill_aggregator = bill_aggregator

    # --- MENU ---

    @envelope
    def get_menu_data(self) -> Envelope:
        return {"data": [_dump(item) for item in self.menu_reader.load_menu()]}

    # --- SESSIONS ---

    @envelope
    def create_new_session(self, session_name: Optional[str] = None) -> Envelope:
        return {"sessionId": self.session_manager.create_session(session_name)}

    @envelope
    def get_active_session(self) -> Envelope:
        return {"session": _dump(self.session_manager.get_active_session())}

    @envelope
    def list_sessions(self) -> Envelope:
        return {"data": [_dump(s) for s in self.session_manager.list_sessions()]}

    @envelope
    def close_session(self, session_id: str) -> Envelope:
        total = self.session_manager.close_session(session_id)
        return {"message": "Session closed successfully", "totalAmount": total}

    # --- ORDERS ---

    @envelope
    def add_order(self, order_data) -> Envelope:
        new_order = order_data if isinstance(order_data, NewOrder) else NewOrder.model_validate(order_data)
        order_id = self.order_ledger.add_order(new_order)
        return {"orderId": order_id, "message": "Order added successfully"}

    @envelope
    def get_all_orders(self, session_id: str) -> Envelope:
        return {"data": [_dump(o) for o in self.order_ledger.list_orders(session_id)]}

    @envelope
    def update_order_status(self, order_id: str, new_status: str, notes: Optional[str] = None) -> Envelope:
        try:
            status = OrderStatus(new_status)
        except ValueError:
            raise Unexpected(f"Unknown order status: {new_status}") from None
        self.order_ledger.update_status(order_id, status, notes)
        return {"message": f"Order status updated to {status.value}"}

    @envelope
    def delete_order(self, order_id: str) -> Envelope:
        self.order_ledger.delete_order(order_id)
        return {"message": "Order deleted successfully"}

    # --- BILL ---

    @envelope
    def calculate_bill(self, session_id: str) -> Envelope:
        bill, orders = self.bill_aggregator.compute_bill(session_id)
        return {"summary": _dump(bill), "orders": [_dump(o) for o in orders]}


def build_dining_service(store, id_generator, clock) -> DiningService:
    """Wire the readers and ledgers over a single table store."""
    menu_reader = MenuReader(store)
    order_ledger = OrderLedger(store, id_generator, clock)
    bill_aggregator = BillAggregator(order_ledger)
    session_manager = SessionManager(store, bill_aggregator, id_generator, clock)
    return DiningService(menu_reader, session_manager, order_ledger, bill_aggregator)
