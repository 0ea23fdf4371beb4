import logging

from group_dining.domain.models import MENU_TABLE, TABLE_SCHEMAS
from group_dining.infrastructure.database import Base, engine
from group_dining.infrastructure.repositories.table_store import SqlTableStore

logger = logging.getLogger(__name__)

# id, category, name, price, description, vegetarian, available
SAMPLE_MENU = [
    (1, "Starters", "Spring Rolls", "6.50", "Crispy vegetable rolls with sweet chilli", True, True),
    (2, "Starters", "Chicken Satay", "8.00", "Grilled skewers with peanut sauce", False, True),
    (3, "Mains", "Green Curry", "14.50", "Chicken in coconut green curry, jasmine rice", False, True),
    (4, "Mains", "Pad Thai", "13.00", "Rice noodles, tofu, peanuts, lime", True, True),
    (5, "Mains", "Beef Massaman", "16.00", "Slow-cooked beef, potatoes, peanuts", False, True),
    (6, "Desserts", "Mango Sticky Rice", "7.00", "Sweet coconut rice with fresh mango", True, True),
    (7, "Drinks", "Thai Iced Tea", "4.50", "", True, True),
    (8, "Drinks", "Lemonade", "3.50", "Fresh squeezed", True, ""),
]


def init_tables(store: SqlTableStore) -> None:
    """Create the Menu, Sessions and Orders tables if they are missing."""
    for table, columns in TABLE_SCHEMAS.items():
        store.ensure_table(table, columns)


def seed_sample_menu(store: SqlTableStore) -> int:
    """Fill an empty Menu table with the sample menu. Returns the number of rows added."""
    if len(store.get_all_rows(MENU_TABLE)) > 1:
        logger.info("Menu already has items, skipping sample menu")
        return 0
    for row in SAMPLE_MENU:
        store.append_row(MENU_TABLE, list(row))
    logger.info(f"Seeded {len(SAMPLE_MENU)} sample menu items")
    return len(SAMPLE_MENU)


def init_database(seed: bool = True) -> None:
    Base.metadata.create_all(bind=engine)
    store = SqlTableStore()
    init_tables(store)
    if seed:
        seed_sample_menu(store)


if __name__ == "__main__":
    from group_dining.core.logging_config import setup_logging

    setup_logging()
    init_database()
    logger.info("Database initialised")
