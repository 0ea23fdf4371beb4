import logging
import time
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import OperationalError

from group_dining.core.config import settings
from group_dining.core.logging_config import setup_logging

# 1. Infrastructure & Application Imports
from group_dining.application.dining_service import DiningService, build_dining_service
from group_dining.infrastructure.clock import make_clock
from group_dining.infrastructure.database import Base, engine
from group_dining.infrastructure.id_generator import build_id_generator
from group_dining.infrastructure.repositories.table_store import SqlTableStore
from group_dining.init_database import init_tables, seed_sample_menu
from group_dining.interfaces import dining_api

setup_logging()
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# ---------------------------------------------------------
# DATABASE CONNECTION (With Retry Logic)
# ---------------------------------------------------------
def connect_database(retries: int = settings.DB_CONNECT_RETRIES, wait_seconds: int = settings.DB_CONNECT_WAIT_SECONDS) -> bool:
    for attempt in range(retries):
        try:
            logger.info(f"🔄 Attempting DB connection ({attempt + 1}/{retries})...")
            Base.metadata.create_all(bind=engine)
            logger.info("✅ DB Connected and Tables Created.")
            return True
        except OperationalError:
            logger.warning(f"⚠️ DB not ready yet. Waiting {wait_seconds}s...")
            time.sleep(wait_seconds)
    logger.error("❌ Could not connect to DB after retries.")
    return False


# ---------------------------------------------------------
# COMPOSITION ROOT
# ---------------------------------------------------------
def build_default_service() -> DiningService | None:
    if not connect_database():
        return None
    try:
        store = SqlTableStore()
        init_tables(store)
        if settings.SEED_SAMPLE_MENU:
            seed_sample_menu(store)
        return build_dining_service(store, build_id_generator(), make_clock())
    except Exception as e:
        logger.error(f"❌ Error initializing services: {e}", exc_info=True)
        return None


def _validation_message(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


def create_app(dining: DiningService | None = None) -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME)

    if dining is None:
        dining = build_default_service()
    if dining is not None:
        app.state.dining = dining

    # Include Routers
    app.include_router(dining_api.router)

    @app.exception_handler(RequestValidationError)
    async def validation_failure(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": _validation_message(exc), "errorType": "Unexpected"},
        )

    @app.get("/")
    def health_check():
        # If the DB never came up there is no service to talk to
        status = "active" if hasattr(app.state, "dining") else "degraded"
        return {"status": status, "system": "Group Dining Order Manager"}

    @app.get("/ui", response_class=HTMLResponse)
    def index(request: Request):
        context = {"title": "Group Dining Order Manager", "orders": None, "bill": None}
        if not hasattr(app.state, "dining"):
            unavailable = {"success": False, "error": "Service unavailable: database not connected", "errorType": "StoreUnavailable"}
            context.update(menu=unavailable, active=unavailable)
            return templates.TemplateResponse(request, "index.html", context, status_code=503)

        dining = app.state.dining
        menu = dining.get_menu_data()
        active = dining.get_active_session()
        orders, bill = None, None
        if active["success"]:
            session_id = active["session"]["sessionId"]
            orders = dining.get_all_orders(session_id)
            bill = dining.calculate_bill(session_id)
        context.update(menu=menu, active=active, orders=orders, bill=bill)
        return templates.TemplateResponse(request, "index.html", context)

    return app


app = create_app()
