from abc import ABC, abstractmethod
from typing import Any, List

class ITableStore(ABC):
    """
    Row-oriented table storage.
    Row and column numbers are 1-based and the header is row 1, so the data
    row at position i of get_all_rows() is row i + 1.
    Every method raises StoreUnavailable when the table does not exist.
    """

    @abstractmethod
    def get_all_rows(self, table: str) -> List[List[Any]]:
        """All rows in physical order, header row first."""
        pass

    @abstractmethod
    def append_row(self, table: str, values: List[Any]) -> None:
        pass

    @abstractmethod
    def set_cell(self, table: str, row_index: int, col_index: int, value: Any) -> None:
        pass

    @abstractmethod
    def delete_row(self, table: str, row_index: int) -> None:
        """Remove a data row; the rows below it move up by one."""
        pass
