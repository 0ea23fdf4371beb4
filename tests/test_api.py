import pytest
from fastapi.testclient import TestClient

from group_dining.domain.models import MENU_TABLE, ORDERS_TABLE
from group_dining.main import create_app


@pytest.fixture
def client(dining):
    return TestClient(create_app(dining=dining))


def test_health_check(client):
    assert client.get("/").json() == {"status": "active", "system": "Group Dining Order Manager"}


def test_menu(store, client):
    store.append_row(MENU_TABLE, [1, "Drinks", "Tea", "4.50", "", "", ""])

    body = client.get("/api/menu").json()

    assert body["success"] is True
    assert body["data"][0]["name"] == "Tea"
    assert body["data"][0]["price"] == 4.5


def test_order_lifecycle_over_http(client):
    session = client.get("/api/sessions/active").json()["session"]
    session_id = session["sessionId"]

    added = client.post("/api/orders", json={
        "sessionId": session_id, "userName": "Alice", "itemId": 3, "itemName": "Green Curry",
        "category": "Mains", "quantity": 2, "pricePerItem": "14.50",
    }).json()
    assert added["success"] is True

    patched = client.patch(f"/api/orders/{added['orderId']}/status", json={"status": "Served"}).json()
    assert patched == {"success": True, "message": "Order status updated to Served"}

    orders = client.get(f"/api/sessions/{session_id}/orders").json()["data"]
    assert orders[0]["status"] == "Served"
    assert orders[0]["servedTime"]

    bill = client.get(f"/api/sessions/{session_id}/bill").json()
    assert bill["summary"]["servedAmount"] == 29
    assert bill["summary"]["byStatus"]["Not Available"] == 0

    closed = client.post(f"/api/sessions/{session_id}/close").json()
    assert closed["totalAmount"] == 29

    assert client.delete(f"/api/orders/{added['orderId']}").json()["success"] is True


def test_create_session_with_and_without_body(client):
    assert client.post("/api/sessions", json={"sessionName": "Brunch"}).json() == {
        "success": True, "sessionId": "SESSION_1",
    }
    assert client.post("/api/sessions").json()["success"] is True
    names = [s["sessionName"] for s in client.get("/api/sessions").json()["data"]]
    assert names == ["Brunch", "Dinner Session"]


def test_failures_are_envelopes(client):
    response = client.delete("/api/orders/ORD_404")

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Order not found", "errorType": "NotFound"}


def test_invalid_body_is_an_envelope(client):
    response = client.post("/api/orders", json={"sessionId": "SESSION_1", "quantity": 0})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert "quantity" in body["error"]


def test_ui_page(store, client):
    store.append_row(MENU_TABLE, [1, "Drinks", "Thai Iced Tea", "4.50", "", "", ""])

    response = client.get("/ui")

    assert response.status_code == 200
    assert "Group Dining Order Manager" in response.text
    assert "Thai Iced Tea" in response.text
    assert "New Dinner Session" in response.text


def test_ui_page_when_the_service_is_down(dining):
    app = create_app(dining=dining)
    del app.state.dining
    client = TestClient(app)

    assert client.get("/").json()["status"] == "degraded"
    response = client.get("/ui")
    assert response.status_code == 503
    assert "database not connected" in response.text


def test_ui_page_shows_hand_entered_statuses(store, client):
    session_id = client.get("/api/sessions/active").json()["session"]["sessionId"]
    store.append_row(ORDERS_TABLE, ["ORD_X", session_id, "Bob", 7, "Tea", "Drinks", 1, "3", "3", "Comped", "", "", ""])

    response = client.get("/ui")

    assert response.status_code == 200
    assert "Comped" in response.text
