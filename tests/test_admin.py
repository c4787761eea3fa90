from models.notification_model import Notification


def _admin(client, method, path, admin, **kwargs):
    params = {"user_id": admin.id, **kwargs.pop("params", {})}
    return getattr(client, method)(f"/api/admin{path}", params=params, **kwargs)


def test_non_admin_is_unauthorized(client, buyer, supplier):
    for user in (buyer, supplier):
        assert client.get("/api/admin/orders", params={"user_id": user.id}).status_code == 401
        assert client.get("/api/admin/users", params={"user_id": user.id}).status_code == 401
    assert client.get("/api/admin/bookings").status_code == 422


def test_admin_booking_override_skips_the_lifecycle(client, admin, buyer, mechanic_payload):
    booking = client.post("/api/bookings/mechanic", params={"user_id": buyer.id}, json=mechanic_payload).json()

    r = _admin(client, "patch", f"/bookings/{booking['id']}", admin,
               params={"kind": "mechanic"}, json={"status": "COMPLETED"})
    assert r.status_code == 200
    assert r.json()["status"] == "COMPLETED"
    assert r.json()["type"] == "MECHANIC"

    r = _admin(client, "patch", f"/bookings/{booking['id']}", admin,
               params={"kind": "mechanic"}, json={"status": "FINISHED"})
    assert r.status_code == 400


def test_admin_order_override(client, admin, buyer, product):
    order = client.post("/api/orders", params={"user_id": buyer.id},
                        json={"items": [{"product_id": product.id, "quantity": 1}]}).json()

    r = _admin(client, "patch", f"/orders/{order['id']}", admin, json={"status": "DELIVERED"})
    assert r.status_code == 200
    assert r.json()["status"] == "DELIVERED"

    listed = _admin(client, "get", "/orders", admin, params={"status": "delivered"}).json()
    assert [o["id"] for o in listed] == [order["id"]]


def test_admin_lists_both_booking_kinds(client, admin, buyer, mechanic_payload, logistics_payload):
    client.post("/api/bookings/mechanic", params={"user_id": buyer.id}, json=mechanic_payload)
    client.post("/api/bookings/logistics", params={"user_id": buyer.id}, json=logistics_payload)

    r = _admin(client, "get", "/bookings", admin)
    assert r.status_code == 200
    assert sorted(b["type"] for b in r.json()) == ["LOGISTICS", "MECHANIC"]


def test_approve_and_reject_provider(client, db, admin, make_user):
    owner = make_user("LOGISTICS", "newdriver@example.com")
    profile = client.post("/api/onboarding/logistics", params={"user_id": owner.id},
                          json={"company_name": "Fresh Vans"}).json()
    assert client.get("/api/logistics").json() == []

    r = _admin(client, "post", f"/logistics/{profile['id']}/approve", admin)
    assert r.status_code == 200
    assert r.json() == {"ok": True, "id": profile["id"], "verified": True, "approved": True, "rejected": False}
    assert [p["company_name"] for p in client.get("/api/logistics").json()] == ["Fresh Vans"]

    r = _admin(client, "post", f"/logistics/{profile['id']}/reject", admin)
    assert r.json()["approved"] is False
    assert client.get("/api/logistics").json() == []

    db.expire_all()
    titles = [n.title for n in db.query(Notification).filter(Notification.user_id == owner.id)]
    assert sorted(titles) == ["Profile Approved", "Profile Rejected"]


def test_approve_unknown(client, admin):
    assert _admin(client, "post", "/mechanics/999/approve", admin).status_code == 404
    assert _admin(client, "post", "/pilots/1/approve", admin).status_code == 404


def test_manual_rating(client, admin, mechanic):
    url = f"/mechanics/{mechanic.mechanic_profile.id}/rating"
    r = _admin(client, "patch", url, admin, json={"rating": 4.7})
    assert r.status_code == 200
    assert r.json()["rating"] == 4.7
    assert _admin(client, "patch", url, admin, json={"rating": 6}).status_code == 422


def test_admin_user_list(client, admin, buyer, supplier):
    r = _admin(client, "get", "/users", admin)
    assert {u["email"] for u in r.json()} == {"admin@example.com", "buyer@example.com", "supplier@example.com"}
    r = _admin(client, "get", "/users", admin, params={"role": "buyer"})
    assert [u["email"] for u in r.json()] == ["buyer@example.com"]


def test_rejected_profiles_leave_the_approval_queue(client, admin, make_user):
    owner = make_user("MECHANIC", "newmech@example.com")
    profile = client.post("/api/onboarding/mechanic", params={"user_id": owner.id},
                          json={"business_name": "Corner Garage"}).json()
    assert profile["rejected"] is False

    def pending():
        return client.get("/api/dashboard/stats", params={"user_id": admin.id}).json()["stats"]["pending_approvals"]

    assert pending() == 1
    r = _admin(client, "post", f"/mechanics/{profile['id']}/reject", admin)
    assert r.json()["rejected"] is True
    assert pending() == 0

    # editing a rejected profile resubmits it
    r = client.patch("/api/profile/mechanic", params={"user_id": owner.id}, json={"city": "Abuja"})
    assert r.status_code == 200
    assert r.json()["rejected"] is False
    assert pending() == 1
