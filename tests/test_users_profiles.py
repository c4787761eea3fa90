def _register(client, email="new@example.com", role="BUYER", password="pa55word"):
    return client.post("/api/users/register", json={
        "name": "New User", "email": email, "password": password, "phone": "08011112222", "role": role,
    })


def test_register_and_login(client):
    r = _register(client, email="New@Example.com")
    assert r.status_code == 201, r.text
    user_id = r.json()["user_id"]

    r = client.post("/api/users/login", json={"email": "new@example.com", "password": "pa55word"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user_id
    assert "password_hash" not in r.json()["user"]

    r = client.post("/api/users/login", json={"email": "new@example.com", "password": "wrong"})
    assert r.status_code == 401


def test_duplicate_email_rejected(client):
    _register(client)
    assert _register(client).status_code == 400


def test_admin_cannot_self_register(client):
    assert _register(client, role="ADMIN").status_code == 422


def test_user_profile_summary(client, supplier):
    r = client.get(f"/api/users/{supplier.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["role"] == "SUPPLIER"
    assert body["has_profile"] is True
    assert body["profile_approved"] is True
    assert client.get("/api/users/999").status_code == 404


def test_onboarding_flow(client, make_user):
    mech = make_user("MECHANIC", "fresh@example.com")
    url = "/api/onboarding/mechanic"

    r = client.post(url, params={"user_id": mech.id}, json={"business_name": "Fresh Garage", "city": "Abuja"})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["approved"] is False
    assert body["phone"] == "08000000000"

    r = client.post(url, params={"user_id": mech.id}, json={"business_name": "Again"})
    assert r.status_code == 409

    r = client.post(url, params={"user_id": mech.id}, json={"business_name": ""})
    assert r.status_code == 422


def test_onboarding_requires_matching_role(client, buyer):
    r = client.post("/api/onboarding/logistics", params={"user_id": buyer.id}, json={"company_name": "Vans"})
    assert r.status_code == 403
    r = client.post("/api/onboarding/spaceships", params={"user_id": buyer.id}, json={})
    assert r.status_code == 404


def test_own_profile_read_and_update(client, driver):
    r = client.get("/api/profile/logistics", params={"user_id": driver.id})
    assert r.status_code == 200
    assert r.json()["company_name"] == "Swift Haulage"

    r = client.patch("/api/profile/logistics", params={"user_id": driver.id},
                     json={"coverage_areas": "Lagos,Ibadan"})
    assert r.status_code == 200
    assert r.json()["coverage_areas"] == "Lagos,Ibadan"
    assert r.json()["company_name"] == "Swift Haulage"

    assert client.get("/api/profile/mechanic", params={"user_id": driver.id}).status_code == 404


def test_public_listings_show_approved_only(client, db, mechanic, make_user):
    from models.mechanic_model import MechanicProfile

    other = make_user("MECHANIC", "m2@example.com")
    db.add(MechanicProfile(user_id=other.id, business_name="Unapproved Garage", city="Lagos"))
    top = make_user("MECHANIC", "m3@example.com")
    db.add(MechanicProfile(user_id=top.id, business_name="Top Garage", city="Abuja", approved=True, rating=4.9))
    db.commit()

    names = [m["business_name"] for m in client.get("/api/mechanics").json()]
    assert names == ["Top Garage", "Musa Auto Works"]

    r = client.get("/api/mechanics", params={"city": "lagos"})
    assert [m["business_name"] for m in r.json()] == ["Musa Auto Works"]


def test_public_supplier_and_logistics_listings(client, supplier, driver):
    assert [s["business_name"] for s in client.get("/api/suppliers").json()] == ["Parts Hub Ltd"]
    assert [d["company_name"] for d in client.get("/api/logistics").json()] == ["Swift Haulage"]
