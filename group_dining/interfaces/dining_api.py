from fastapi import APIRouter, Request
from pydantic import BaseModel
import logging

from group_dining.domain.models import NewOrder

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


class SessionCreate(BaseModel):
    sessionName: str | None = None


class StatusUpdate(BaseModel):
    status: str
    notes: str | None = None


def _dining(request: Request):
    # Built once in the composition root (main.py)
    return request.app.state.dining


# --- MENU ---

@router.get("/menu")
def get_menu(request: Request):
    return _dining(request).get_menu_data()


# --- SESSIONS ---

@router.get("/sessions")
def list_sessions(request: Request):
    return _dining(request).list_sessions()


@router.post("/sessions")
def create_session(request: Request, payload: SessionCreate | None = None):
    name = payload.sessionName if payload else None
    logger.info(f"📨 Create session: {name}")
    return _dining(request).create_new_session(name)


@router.get("/sessions/active")
def get_active_session(request: Request):
    return _dining(request).get_active_session()


@router.post("/sessions/{session_id}/close")
def close_session(request: Request, session_id: str):
    logger.info(f"📨 Close session: {session_id}")
    return _dining(request).close_session(session_id)


@router.get("/sessions/{session_id}/orders")
def get_orders(request: Request, session_id: str):
    return _dining(request).get_all_orders(session_id)


@router.get("/sessions/{session_id}/bill")
def get_bill(request: Request, session_id: str):
    return _dining(request).calculate_bill(session_id)


# --- ORDERS ---

@router.post("/orders")
def add_order(request: Request, payload: NewOrder):
    logger.info(f"📨 Add order: {payload.quantity}x {payload.item_name} for {payload.user_name}")
    return _dining(request).add_order(payload)


@router.patch("/orders/{order_id}/status")
def update_order_status(request: Request, order_id: str, payload: StatusUpdate):
    logger.info(f"📨 Update order {order_id} -> {payload.status}")
    return _dining(request).update_order_status(order_id, payload.status, payload.notes)


@router.delete("/orders/{order_id}")
def delete_order(request: Request, order_id: str):
    logger.info(f"📨 Delete order: {order_id}")
    return _dining(request).delete_order(order_id)
