from sqlalchemy import Column, Integer, String, JSON, ForeignKey
from group_dining.infrastructure.database import Base

class Sheet(Base):
    __tablename__ = "sheets"

    name = Column(String, primary_key=True)
    headers = Column(JSON, nullable=False)  # header row, e.g. ["id", "category", ...]


class SheetRow(Base):
    __tablename__ = "sheet_rows"

    # Physical row order is insertion order, so the autoincrement id doubles as the sort key.
    id = Column(Integer, primary_key=True, autoincrement=True)
    sheet_name = Column(String, ForeignKey("sheets.name"), index=True, nullable=False)

    # Cells are stored exactly as appended; lists are replaced wholesale on update
    # because plain JSON columns do not track in-place mutation.
    cells = Column(JSON, nullable=False)
