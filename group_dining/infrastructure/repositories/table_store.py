import logging
from typing import Any, List

from sqlalchemy.orm import sessionmaker

from group_dining.domain.cells import to_cell
from group_dining.domain.errors import StoreUnavailable
from group_dining.infrastructure.database import SessionLocal
from group_dining.infrastructure.sheet_models import Sheet, SheetRow
from group_dining.interfaces.ITableStore import ITableStore

logger = logging.getLogger(__name__)


class SqlTableStore(ITableStore):
    """
    Spreadsheet-shaped tables kept in a relational database.
    Each table is a `sheets` entry holding its header, plus one `sheet_rows`
    entry per data row.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    # ---------------------------------------------------------
    # ITableStore
    # ---------------------------------------------------------
    def get_all_rows(self, table: str) -> List[List[Any]]:
        session = self.session_factory()
        try:
            sheet = self._require_sheet(session, table)
            rows = self._data_rows(session, table)
            return [list(sheet.headers)] + [list(row.cells) for row in rows]
        finally:
            session.close()

    def append_row(self, table: str, values: List[Any]) -> None:
        session = self.session_factory()
        try:
            self._require_sheet(session, table)
            session.add(SheetRow(sheet_name=table, cells=[to_cell(v) for v in values]))
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def set_cell(self, table: str, row_index: int, col_index: int, value: Any) -> None:
        if col_index < 1:
            raise IndexError(f"Column {col_index} is out of range")
        session = self.session_factory()
        try:
            self._require_sheet(session, table)
            row = self._row_at(session, table, row_index)
            cells = list(row.cells)
            if col_index > len(cells):
                cells.extend([""] * (col_index - len(cells)))
            cells[col_index - 1] = to_cell(value)
            row.cells = cells
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def delete_row(self, table: str, row_index: int) -> None:
        session = self.session_factory()
        try:
            self._require_sheet(session, table)
            session.delete(self._row_at(session, table, row_index))
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ---------------------------------------------------------
    # Bootstrap
    # ---------------------------------------------------------
    def ensure_table(self, table: str, headers: List[str]) -> bool:
        """Create the table with the given header row. Returns False if it already exists."""
        session = self.session_factory()
        try:
            if session.get(Sheet, table) is not None:
                return False
            session.add(Sheet(name=table, headers=list(headers)))
            session.commit()
            logger.info(f"Created table {table} with columns {headers}")
            return True
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------
    def _require_sheet(self, session, table: str) -> Sheet:
        sheet = session.get(Sheet, table)
        if sheet is None:
            raise StoreUnavailable(f"{table} sheet not found")
        return sheet

    def _data_rows(self, session, table: str) -> List[SheetRow]:
        return (
            session.query(SheetRow)
            .filter(SheetRow.sheet_name == table)
            .order_by(SheetRow.id)
            .all()
        )

    def _row_at(self, session, table: str, row_index: int) -> SheetRow:
        # Row 1 is the header, which is not addressable as a data row.
        rows = self._data_rows(session, table)
        position = row_index - 2
        if position < 0 or position >= len(rows):
            raise IndexError(f"Row {row_index} is out of range for {table}")
        return rows[position]
