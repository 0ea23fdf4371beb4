from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------
# TABLE SCHEMAS (column order is the storage contract)
# ---------------------------------------------------------
MENU_TABLE = "Menu"
SESSIONS_TABLE = "Sessions"
ORDERS_TABLE = "Orders"

MENU_COLUMNS = ["id", "category", "name", "price", "description", "vegetarian", "available"]
SESSION_COLUMNS = ["sessionId", "sessionName", "startTime", "status", "totalAmount", "people"]
ORDER_COLUMNS = [
    "orderId", "sessionId", "userName", "itemId", "itemName", "category", "quantity",
    "pricePerItem", "totalPrice", "status", "orderTime", "servedTime", "notes",
]

TABLE_SCHEMAS = {
    MENU_TABLE: MENU_COLUMNS,
    SESSIONS_TABLE: SESSION_COLUMNS,
    ORDERS_TABLE: ORDER_COLUMNS,
}


def column_number(columns: list, name: str) -> int:
    """1-based column position, as used by ITableStore.set_cell."""
    return columns.index(name) + 1


class OrderStatus(str, Enum):
    ORDERED = "Ordered"
    SERVED = "Served"
    NOT_AVAILABLE = "Not Available"


def parse_order_status(text: str) -> Union[OrderStatus, str]:
    """Known statuses become OrderStatus; anything else stored by hand is kept as text."""
    try:
        return OrderStatus(text)
    except ValueError:
        return text


def status_text(status: Union[OrderStatus, str]) -> str:
    return status.value if isinstance(status, OrderStatus) else status


class SessionStatus(str, Enum):
    ACTIVE = "Active"
    CLOSED = "Closed"


class DiningRecord(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MenuItem(DiningRecord):
    model_config = ConfigDict(frozen=True)

    id: int
    category: str = ""
    name: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    description: str = ""
    vegetarian: bool = False
    available: bool = True


class Session(DiningRecord):
    session_id: str
    session_name: str = ""
    start_time: Optional[datetime] = None
    status: SessionStatus = SessionStatus.ACTIVE
    total_amount: Decimal = Decimal("0")
    people: str = ""


class NewOrder(DiningRecord):
    """A fully denormalized order as supplied by the caller."""

    session_id: str
    user_name: str
    item_id: int
    item_name: str
    category: str = ""
    quantity: int = Field(gt=0)
    price_per_item: Decimal = Field(ge=0)
    total_price: Optional[Decimal] = None

    @model_validator(mode="after")
    def default_total_price(self):
        if self.total_price is None:
            self.total_price = self.price_per_item * self.quantity
        return self


class Order(DiningRecord):
    order_id: str
    session_id: str
    user_name: str = ""
    item_id: int = 0
    item_name: str = ""
    category: str = ""
    quantity: int = 0
    price_per_item: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    # rows edited outside the app may carry statuses the enum does not know
    status: Union[OrderStatus, str] = Field(default=OrderStatus.ORDERED, union_mode="left_to_right")
    order_time: Optional[datetime] = None
    served_time: Optional[datetime] = None
    notes: str = ""
    row_index: int  # physical 1-based row in the Orders table (header is row 1)


def _seeded_status_totals() -> Dict[str, Decimal]:
    return {status.value: Decimal("0") for status in OrderStatus}


class BillSummary(DiningRecord):
    total_items: int = 0
    total_amount: Decimal = Decimal("0")
    served_amount: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")
    cancelled_amount: Decimal = Decimal("0")
    by_person: Dict[str, Decimal] = Field(default_factory=dict)
    by_category: Dict[str, Decimal] = Field(default_factory=dict)
    by_status: Dict[str, Decimal] = Field(default_factory=_seeded_status_totals)
