import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from group_dining.application.bill_aggregator import BillAggregator
from group_dining.core.config import settings
from group_dining.domain.cells import cell_at, to_datetime, to_decimal, to_text
from group_dining.domain.errors import NotFound
from group_dining.domain.models import (
    SESSION_COLUMNS, SESSIONS_TABLE, Session, SessionStatus, column_number,
)
from group_dining.infrastructure.clock import Clock
from group_dining.interfaces.IIdGenerator import IIdGenerator
from group_dining.interfaces.ITableStore import ITableStore

logger = logging.getLogger(__name__)

STATUS_COL = column_number(SESSION_COLUMNS, "status")
TOTAL_AMOUNT_COL = column_number(SESSION_COLUMNS, "totalAmount")

FALLBACK_SESSION_NAME = "Dinner Session"


def session_from_row(row: list) -> Session:
    return Session(
        session_id=to_text(cell_at(row, 0)),
        session_name=to_text(cell_at(row, 1)),
        start_time=to_datetime(cell_at(row, 2)),
        status=SessionStatus(to_text(cell_at(row, 3))),
        total_amount=to_decimal(cell_at(row, 4)),
        people=to_text(cell_at(row, 5)),
    )


class SessionManager:
    def __init__(
        self,
        store: ITableStore,
        bill_aggregator: BillAggregator,
        id_generator: IIdGenerator,
        clock: Clock,
        default_session_name: Optional[str] = None,
    ):
        self.store = store
        self.bill_aggregator = bill_aggregator
        self.id_generator = id_generator
        self.clock = clock
        self.default_session_name = default_session_name or settings.DEFAULT_SESSION_NAME

    def create_session(self, name: Optional[str] = None) -> str:
        session_id = self.id_generator.session_id()
        self.store.append_row(SESSIONS_TABLE, [
            session_id,
            name or FALLBACK_SESSION_NAME,
            self.clock(),
            SessionStatus.ACTIVE,
            Decimal("0"),  # filled in at close
            "",  # people
        ])
        logger.info(f"Session {session_id} created ({name or FALLBACK_SESSION_NAME})")
        return session_id

    def find_active_session(self) -> Optional[Session]:
        """Most recently appended Active session, or None. Never writes."""
        rows = self.store.get_all_rows(SESSIONS_TABLE)
        for row in reversed(rows[1:]):
            if cell_at(row, 3) == SessionStatus.ACTIVE.value:
                return session_from_row(row)
        return None

    def get_active_session(self) -> Session:
        """Active session, opening a new one when there is none."""
        session = self.find_active_session()
        if session is not None:
            return session

        logger.info("No active session found, opening a new one")
        return self.get_session(self.create_session(self.default_session_name))

    def get_session(self, session_id: str) -> Session:
        _, row = self._find_row(session_id)
        return session_from_row(row)

    def list_sessions(self) -> List[Session]:
        rows = self.store.get_all_rows(SESSIONS_TABLE)
        return [session_from_row(row) for row in rows[1:] if to_text(cell_at(row, 0))]

    def close_session(self, session_id: str) -> Optional[Decimal]:
        """
        Mark the session Closed and record what was actually served.
        Pending and cancelled items are not part of the recorded total.
        Returns the recorded amount, or None if the bill could not be computed.
        """
        row_index, _ = self._find_row(session_id)
        self.store.set_cell(SESSIONS_TABLE, row_index, STATUS_COL, SessionStatus.CLOSED)

        try:
            bill, _ = self.bill_aggregator.compute_bill(session_id)
        except Exception as e:
            # The session stays closed; only the recorded total is skipped.
            logger.warning(f"Session {session_id} closed without a total: {e}")
            return None

        self.store.set_cell(SESSIONS_TABLE, row_index, TOTAL_AMOUNT_COL, bill.served_amount)
        logger.info(f"Session {session_id} closed with served total {bill.served_amount}")
        return bill.served_amount

    def _find_row(self, session_id: str) -> Tuple[int, list]:
        """(1-based row number, row) of the session."""
        rows = self.store.get_all_rows(SESSIONS_TABLE)
        for i in range(1, len(rows)):
            if cell_at(rows[i], 0) == session_id:
                return i + 1, rows[i]
        raise NotFound("Session not found")
