def _stats(client, user):
    r = client.get("/api/dashboard/stats", params={"user_id": user.id})
    assert r.status_code == 200
    return r.json()


def test_supplier_stats(client, buyer, supplier, product):
    order = client.post("/api/orders", params={"user_id": buyer.id},
                        json={"items": [{"product_id": product.id, "quantity": 2}]}).json()

    body = _stats(client, supplier)
    assert body["role"] == "SUPPLIER"
    assert body["stats"]["total_products"] == 1
    assert body["stats"]["total_orders"] == 1
    assert body["stats"]["pending_orders"] == 1
    assert body["stats"]["total_revenue"] == 0.0

    for user, status in ((supplier, "PROCESSING"), (supplier, "SHIPPED"), (buyer, "DELIVERED")):
        client.patch(f"/api/orders/{order['id']}/status", params={"user_id": user.id}, json={"status": status})

    stats = _stats(client, supplier)["stats"]
    assert stats["pending_orders"] == 0
    assert stats["total_revenue"] == 20000.0


def test_provider_stats_are_shared_by_mechanics_and_drivers(client, buyer, mechanic, driver,
                                                             mechanic_payload, logistics_payload):
    m = client.post("/api/bookings/mechanic", params={"user_id": buyer.id}, json=mechanic_payload).json()
    client.post("/api/bookings/logistics", params={"user_id": buyer.id}, json=logistics_payload)

    for status in ("CONFIRMED", "IN_PROGRESS", "COMPLETED"):
        client.patch(f"/api/bookings/mechanic/{m['id']}", params={"user_id": mechanic.id}, json={"status": status})

    mech = _stats(client, mechanic)["stats"]
    assert mech == {"total_bookings": 1, "pending": 0, "active": 0, "completed": 1, "cancelled": 0,
                    "total_revenue": 15000.0, "rating": 4.2}

    drv = _stats(client, driver)["stats"]
    assert drv["total_bookings"] == 1
    assert drv["pending"] == 1
    assert drv["total_revenue"] == 0.0
    assert set(drv) == set(mech)


def test_buyer_and_admin_stats(client, admin, buyer, product, mechanic_payload):
    client.post("/api/orders", params={"user_id": buyer.id},
                json={"items": [{"product_id": product.id, "quantity": 1}]})
    client.post("/api/bookings/mechanic", params={"user_id": buyer.id}, json=mechanic_payload)

    assert _stats(client, buyer)["stats"] == {
        "total_orders": 1, "active_orders": 1, "total_bookings": 1, "active_bookings": 1,
    }
    stats = _stats(client, admin)["stats"]
    assert stats["total_orders"] == 1
    assert stats["total_bookings"] == 1
    assert stats["pending_approvals"] == 0


def test_provider_dashboard_payload(client, buyer, mechanic, mechanic_payload):
    client.post("/api/bookings/mechanic", params={"user_id": buyer.id}, json=mechanic_payload)

    r = client.get("/api/dashboard/provider", params={"user_id": mechanic.id})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["kind"] == "MECHANIC"
    assert body["profile"]["business_name"] == "Musa Auto Works"
    assert body["poll_interval_seconds"] == 30
    assert body["stats"]["pending"] == 1

    row = body["bookings"][0]
    assert row["booking"]["type"] == "MECHANIC"
    assert row["display"]["color"] == "yellow"
    assert [a["status"] for a in row["actions"]] == ["CANCELLED", "CONFIRMED"]


def test_logistics_dashboard_payload(client, buyer, driver, logistics_payload):
    client.post("/api/bookings/logistics", params={"user_id": buyer.id}, json=logistics_payload)
    body = client.get("/api/dashboard/provider", params={"user_id": driver.id}).json()
    assert body["kind"] == "LOGISTICS"
    assert body["profile"]["company_name"] == "Swift Haulage"
    assert body["bookings"][0]["booking"]["tracking_number"].startswith("TRK-")


def test_provider_dashboard_rejects_other_roles(client, buyer, make_user):
    assert client.get("/api/dashboard/provider", params={"user_id": buyer.id}).status_code == 400
    bare = make_user("MECHANIC", "bare@example.com")
    assert client.get("/api/dashboard/provider", params={"user_id": bare.id}).status_code == 404
