from decimal import Decimal

from models.notification_model import Notification
from models.order_model import Order
from models.product_model import Product
from services.order_service import order_total


def _checkout(client, buyer, product, quantity=2):
    return client.post(
        "/api/orders",
        params={"user_id": buyer.id},
        json={
            "items": [{"product_id": product.id, "quantity": quantity}],
            "shipping_address": {"full_name": "Ada Buyer", "address": "7 Allen Avenue", "city": "Lagos"},
            "payment_method": "bank_transfer",
        },
    )


def test_order_total_adds_shipping_and_rounded_vat():
    assert order_total(Decimal("20000")) == Decimal("24000.00")
    # 7.5% of 1234 is 92.55, rounded to a whole unit
    assert order_total(Decimal("1234")) == Decimal("3827.00")


def test_checkout_snapshots_items_and_decrements_stock(client, db, buyer, product):
    r = _checkout(client, buyer, product)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["tracking_id"].startswith("EDM-")
    assert len(body["tracking_id"]) == len("EDM-") + 8
    assert body["status"] == "PENDING"
    assert body["total"] == 24000.0
    assert body["items"][0]["name"] == "Brake Pads"
    assert body["items"][0]["total_price"] == 20000.0
    assert body["shipping_address"]["city"] == "Lagos"

    db.expire_all()
    assert db.get(Product, product.id).stock == 3


def test_buying_the_last_units_marks_product_out_of_stock(client, db, buyer, product):
    assert _checkout(client, buyer, product, quantity=5).status_code == 201
    db.expire_all()
    p = db.get(Product, product.id)
    assert p.stock == 0
    assert p.status == "OUT_OF_STOCK"

    r = _checkout(client, buyer, product, quantity=1)
    assert r.status_code == 400


def test_insufficient_stock_creates_nothing(client, db, buyer, product):
    r = _checkout(client, buyer, product, quantity=6)
    assert r.status_code == 400
    assert "Insufficient stock" in r.json()["detail"]
    db.expire_all()
    assert db.query(Order).count() == 0
    assert db.get(Product, product.id).stock == 5


def test_empty_or_unknown_items_rejected(client, buyer):
    r = client.post("/api/orders", params={"user_id": buyer.id}, json={"items": []})
    assert r.status_code == 422
    r = client.post("/api/orders", params={"user_id": buyer.id},
                    json={"items": [{"product_id": 999, "quantity": 1}]})
    assert r.status_code == 400


def test_checkout_requires_caller(client, product):
    r = client.post("/api/orders", json={"items": [{"product_id": product.id, "quantity": 1}]})
    assert r.status_code == 422
    r = client.post("/api/orders", params={"user_id": 999},
                    json={"items": [{"product_id": product.id, "quantity": 1}]})
    assert r.status_code == 401


def test_checkout_notifies_buyer_and_supplier(client, db, buyer, supplier, product):
    _checkout(client, buyer, product)
    db.expire_all()
    assert db.query(Notification).filter(Notification.user_id == buyer.id).count() == 1
    assert db.query(Notification).filter(Notification.user_id == supplier.id).count() == 1


def test_order_visibility(client, buyer, other_buyer, supplier, admin, product):
    order_id = _checkout(client, buyer, product).json()["id"]

    assert client.get(f"/api/orders/{order_id}", params={"user_id": buyer.id}).status_code == 200
    assert client.get(f"/api/orders/{order_id}", params={"user_id": supplier.id}).status_code == 200
    assert client.get(f"/api/orders/{order_id}", params={"user_id": admin.id}).status_code == 200
    assert client.get(f"/api/orders/{order_id}", params={"user_id": other_buyer.id}).status_code == 403
    assert client.get("/api/orders/999", params={"user_id": buyer.id}).status_code == 404

    mine = client.get("/api/orders", params={"user_id": buyer.id}).json()
    assert [o["id"] for o in mine] == [order_id]
    assert client.get("/api/orders", params={"user_id": other_buyer.id}).json() == []


def test_supplier_orders_list(client, buyer, supplier, product):
    order_id = _checkout(client, buyer, product).json()["id"]
    r = client.get("/api/supplier/orders", params={"user_id": supplier.id})
    assert r.status_code == 200
    assert [o["id"] for o in r.json()] == [order_id]
    assert client.get("/api/supplier/orders", params={"user_id": supplier.id, "status": "shipped"}).json() == []
    assert client.get("/api/supplier/orders", params={"user_id": buyer.id}).status_code == 403


def test_supplier_and_buyer_walk_the_lifecycle(client, buyer, supplier, product):
    order_id = _checkout(client, buyer, product).json()["id"]

    def move(user, status):
        return client.patch(f"/api/orders/{order_id}/status", params={"user_id": user.id}, json={"status": status})

    r = move(supplier, "PROCESSING")
    assert r.status_code == 200
    assert r.json() == {"message": "Order status updated", "id": order_id,
                        "previous_status": "PENDING", "new_status": "PROCESSING"}

    r = move(buyer, "SHIPPED")
    assert r.status_code == 409
    assert r.json()["current"] == "PROCESSING"
    assert r.json()["allowed"] == []

    assert move(supplier, "SHIPPED").status_code == 200
    assert move(supplier, "DELIVERED").status_code == 409
    assert move(buyer, "DELIVERED").status_code == 200
    assert move(supplier, "CANCELLED").status_code == 409


def test_buyer_can_cancel_pending_order(client, buyer, other_buyer, product):
    order_id = _checkout(client, buyer, product).json()["id"]
    r = client.patch(f"/api/orders/{order_id}/status", params={"user_id": other_buyer.id},
                     json={"status": "CANCELLED"})
    assert r.status_code == 403
    r = client.patch(f"/api/orders/{order_id}/status", params={"user_id": buyer.id},
                     json={"status": "cancelled"})
    assert r.status_code == 200
    assert r.json()["new_status"] == "CANCELLED"


def test_invalid_status_value(client, buyer, supplier, product):
    order_id = _checkout(client, buyer, product).json()["id"]
    r = client.patch(f"/api/orders/{order_id}/status", params={"user_id": supplier.id}, json={"status": "LOST"})
    assert r.status_code == 400
    assert "valid" in r.json()


def test_repeated_product_lines_share_one_stock_check(client, db, buyer, product):
    r = client.post(
        "/api/orders",
        params={"user_id": buyer.id},
        json={"items": [{"product_id": product.id, "quantity": 3}, {"product_id": product.id, "quantity": 3}]},
    )
    assert r.status_code == 400
    assert "Insufficient stock" in r.json()["detail"]
    db.expire_all()
    assert db.get(Product, product.id).stock == 5
    assert db.query(Order).count() == 0


def test_repeated_product_lines_are_merged(client, db, buyer, product):
    r = client.post(
        "/api/orders",
        params={"user_id": buyer.id},
        json={"items": [{"product_id": product.id, "quantity": 2}, {"product_id": product.id, "quantity": 3}]},
    )
    assert r.status_code == 201, r.text
    items = r.json()["items"]
    assert len(items) == 1
    assert items[0]["quantity"] == 5
    db.expire_all()
    p = db.get(Product, product.id)
    assert p.stock == 0
    assert p.status == "OUT_OF_STOCK"
