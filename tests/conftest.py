import os

# Must be set before group_dining.core.config is imported anywhere.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
import pytz
from sqlalchemy.orm import sessionmaker

from group_dining.application.bill_aggregator import BillAggregator
from group_dining.application.dining_service import build_dining_service
from group_dining.application.menu_reader import MenuReader
from group_dining.application.order_ledger import OrderLedger
from group_dining.application.session_manager import SessionManager
from group_dining.domain.models import NewOrder
from group_dining.infrastructure.database import Base, build_engine
from group_dining.infrastructure.repositories.table_store import SqlTableStore
from group_dining.init_database import init_tables
from group_dining.interfaces.IIdGenerator import IIdGenerator


class SequentialIdGenerator(IIdGenerator):
    def __init__(self):
        self.sessions = 0
        self.orders = 0

    def session_id(self) -> str:
        self.sessions += 1
        return f"SESSION_{self.sessions}"

    def order_id(self) -> str:
        self.orders += 1
        return f"ORD_{self.orders}"


class FakeClock:
    def __init__(self):
        self.current = datetime(2024, 5, 1, 19, 0, tzinfo=pytz.UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, minutes: int = 1) -> datetime:
        self.current += timedelta(minutes=minutes)
        return self.current


@pytest.fixture
def bare_store():
    """A store with no tables at all."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield SqlTableStore(sessionmaker(bind=engine))
    engine.dispose()


@pytest.fixture
def store(bare_store):
    init_tables(bare_store)
    return bare_store


@pytest.fixture
def ids():
    return SequentialIdGenerator()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def menu_reader(store):
    return MenuReader(store)


@pytest.fixture
def ledger(store, ids, clock):
    return OrderLedger(store, ids, clock)


@pytest.fixture
def bill_aggregator(ledger):
    return BillAggregator(ledger)


@pytest.fixture
def sessions(store, bill_aggregator, ids, clock):
    return SessionManager(store, bill_aggregator, ids, clock)


@pytest.fixture
def dining(store, ids, clock):
    return build_dining_service(store, ids, clock)


@pytest.fixture
def make_order():
    def _make(session_id="SESSION_1", user="Alice", item_id=1, item="Pad Thai",
              category="Mains", quantity=1, price="13.00", total=None):
        return NewOrder(
            session_id=session_id,
            user_name=user,
            item_id=item_id,
            item_name=item,
            category=category,
            quantity=quantity,
            price_per_item=Decimal(price),
            total_price=None if total is None else Decimal(total),
        )
    return _make
