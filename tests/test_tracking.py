import re

import pytest

from services.tracking_service import generate_tracking_id, generate_tracking_number


def _order(client, buyer, product):
    return client.post(
        "/api/orders",
        params={"user_id": buyer.id},
        json={
            "items": [{"product_id": product.id, "quantity": 1}],
            "shipping_address": {"full_name": "Ada Buyer", "address": "7 Allen Avenue", "city": "Lagos"},
        },
    ).json()


def test_code_generators():
    assert re.fullmatch(r"EDM-[A-Z0-9]{8}", generate_tracking_id())
    assert re.fullmatch(r"TRK-[A-Z0-9]{8}", generate_tracking_number())
    assert generate_tracking_id() != generate_tracking_id()


def test_missing_code_is_400(client):
    assert client.get("/api/track").status_code == 400
    assert client.get("/api/track", params={"id": "  "}).status_code == 400


def test_unknown_code_is_404(client):
    assert client.get("/api/track", params={"id": "EDM-NOPE0000"}).status_code == 404


def test_track_order_by_tracking_id_and_numeric_id(client, buyer, product):
    order = _order(client, buyer, product)

    r = client.get("/api/track", params={"id": order["tracking_id"]})
    assert r.status_code == 200
    view = r.json()
    assert view["type"] == "ORDER"
    assert view["tracking_id"] == order["tracking_id"]
    assert view["status"] == "PENDING"
    assert view["status_color"] == "yellow"
    assert view["recipient"] == {"name": "Ada Buyer", "city": "Lagos"}
    assert view["items"][0]["name"] == "Brake Pads"
    assert view["total"] == order["total"]
    assert [s["status"] for s in view["timeline"]] == [
        "Order Placed", "Processing", "Shipped", "Out for Delivery", "Delivered",
    ]
    assert [s["completed"] for s in view["timeline"]] == [True, False, False, False, False]

    by_id = client.get("/api/track", params={"id": str(order["id"])}).json()
    assert by_id["tracking_id"] == order["tracking_id"]


def test_order_estimated_delivery_is_five_days_out(client, buyer, product):
    from datetime import datetime

    order = _order(client, buyer, product)
    view = client.get("/api/track", params={"id": order["tracking_id"]}).json()
    created = datetime.fromisoformat(view["created_at"])
    estimated = datetime.fromisoformat(view["estimated_delivery"])
    assert (estimated - created).days == 5


def test_cancelled_order_timeline_ends_with_cancelled(client, buyer, product):
    order = _order(client, buyer, product)
    client.patch(f"/api/orders/{order['id']}/status", params={"user_id": buyer.id}, json={"status": "CANCELLED"})

    view = client.get("/api/track", params={"id": order["tracking_id"]}).json()
    assert view["status"] == "CANCELLED"
    assert view["timeline"][-1]["status"] == "Cancelled"
    assert view["timeline"][-1]["completed"] is True
    assert len(view["timeline"]) == 2


def test_track_logistics_booking(client, buyer, driver, logistics_payload):
    booking = client.post("/api/bookings/logistics", params={"user_id": buyer.id}, json=logistics_payload).json()
    client.patch(f"/api/bookings/logistics/{booking['id']}", params={"user_id": driver.id},
                 json={"status": "CONFIRMED"})
    client.patch(f"/api/bookings/logistics/{booking['id']}", params={"user_id": driver.id},
                 json={"status": "IN_PROGRESS", "current_location": "Sagamu interchange"})

    r = client.get("/api/track", params={"id": booking["tracking_number"]})
    assert r.status_code == 200
    view = r.json()
    assert view["type"] == "LOGISTICS"
    assert view["current_location"] == "Sagamu interchange"
    assert view["recipient"] == {"name": "Bola", "city": "Ibadan"}
    assert view["shipping_address"] is None
    assert view["items"] == []
    assert view["total"] == 10000.0
    done = {s["status"]: s["completed"] for s in view["timeline"]}
    assert done["Confirmed"] and done["Picked Up"] and done["In Transit"]
    assert not done["Delivered"]


@pytest.mark.parametrize("code", ["99999999999999999999", "9223372036854775808", "0", "²", "１２"])
def test_out_of_range_numeric_codes_are_404(client, code):
    r = client.get("/api/track", params={"id": code})
    assert r.status_code == 404
    assert "detail" in r.json()


def test_logistics_history_keeps_every_location(client, buyer, driver, logistics_payload):
    booking = client.post("/api/bookings/logistics", params={"user_id": buyer.id}, json=logistics_payload).json()
    url = f"/api/bookings/logistics/{booking['id']}"
    client.patch(url, params={"user_id": driver.id}, json={"status": "CONFIRMED"})
    client.patch(url, params={"user_id": driver.id},
                 json={"status": "IN_PROGRESS", "current_location": "Sagamu interchange"})
    client.patch(url, params={"user_id": driver.id}, json={"current_location": "Ibadan toll gate"})

    view = client.get("/api/track", params={"id": booking["tracking_number"]}).json()
    history = view["history"]
    assert [e["status"] for e in history] == ["PENDING", "CONFIRMED", "IN_PROGRESS", "IN_PROGRESS"]
    assert [e["location"] for e in history] == ["Lagos", None, "Sagamu interchange", "Ibadan toll gate"]
    assert view["current_location"] == "Ibadan toll gate"

    steps = {s["status"]: s for s in view["timeline"]}
    assert steps["Confirmed"]["timestamp"] == history[1]["timestamp"]
    assert steps["In Transit"]["timestamp"] == history[2]["timestamp"]
    assert steps["In Transit"]["location"] == "Sagamu interchange"
    assert steps["Picked Up"]["location"] == "12 Ladipo Market"
    assert steps["Delivered"]["completed"] is False


def test_order_timeline_uses_recorded_status_changes(client, buyer, supplier, product):
    order = _order(client, buyer, product)
    client.patch(f"/api/orders/{order['id']}/status", params={"user_id": supplier.id},
                 json={"status": "PROCESSING"})

    view = client.get("/api/track", params={"id": order["tracking_id"]}).json()
    assert [e["status"] for e in view["history"]] == ["PENDING", "PROCESSING"]
    assert view["history"][1]["note"] == "by provider"
    steps = {s["status"]: s for s in view["timeline"]}
    assert steps["Processing"]["completed"] is True
    assert steps["Processing"]["timestamp"] == view["history"][1]["timestamp"]
    assert steps["Shipped"]["completed"] is False
