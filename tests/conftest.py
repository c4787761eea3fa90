import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from werkzeug.security import generate_password_hash

from database.session import get_db, init_db
from main import create_app
from models.logistics_model import LogisticsProfile
from models.mechanic_model import MechanicProfile
from models.product_model import Product
from models.supplier_model import SupplierProfile
from models.user_model import User

PASSWORD = "secret123"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def app(session_factory):
    application = create_app()

    def override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


def _user(db, role, email, name=None, phone="08000000000"):
    u = User(name=name or role.title(), email=email, role=role, phone=phone,
             password_hash=generate_password_hash(PASSWORD))
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def make_user(db):
    def _make(role, email, name=None):
        return _user(db, role, email, name=name)
    return _make


@pytest.fixture
def admin(db):
    return _user(db, "ADMIN", "admin@example.com")


@pytest.fixture
def buyer(db):
    return _user(db, "BUYER", "buyer@example.com", name="Ada Buyer")


@pytest.fixture
def other_buyer(db):
    return _user(db, "BUYER", "other@example.com", name="Other Buyer")


@pytest.fixture
def supplier(db):
    u = _user(db, "SUPPLIER", "supplier@example.com", name="Parts Hub")
    db.add(SupplierProfile(user_id=u.id, business_name="Parts Hub Ltd", city="Lagos",
                           approved=True, verified=True, rating=4.0))
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def mechanic(db):
    u = _user(db, "MECHANIC", "mechanic@example.com", name="Musa")
    db.add(MechanicProfile(user_id=u.id, business_name="Musa Auto Works", city="Lagos",
                           approved=True, verified=True, rating=4.2))
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def driver(db):
    u = _user(db, "LOGISTICS", "driver@example.com", name="Swift")
    db.add(LogisticsProfile(user_id=u.id, company_name="Swift Haulage", city="Lagos",
                            approved=True, verified=True, rating=3.5))
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def product(db, supplier):
    p = Product(supplier_id=supplier.supplier_profile.id, name="Brake Pads", price=Decimal("10000"),
                stock=5, category="Brakes", status="ACTIVE")
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


@pytest.fixture
def mechanic_payload(mechanic):
    return {
        "mechanic_id": mechanic.mechanic_profile.id,
        "vehicle_make": "Toyota",
        "vehicle_model": "Corolla",
        "vehicle_year": "2015",
        "service_type": "Brake Service",
        "estimated_price": 15000,
        "date": "2026-11-02",
        "time": "10:00",
        "address": "4 Workshop Close",
        "city": "Lagos",
        "phone": "08011111111",
    }


@pytest.fixture
def logistics_payload(driver):
    return {
        "provider_id": driver.logistics_profile.id,
        "package_type": "medium",
        "delivery_speed": "SAME_DAY",
        "weight": 10,
        "pickup_address": "12 Ladipo Market",
        "pickup_city": "Lagos",
        "delivery_address": "22 Ring Road",
        "delivery_city": "Ibadan",
        "recipient_name": "Bola",
        "recipient_phone": "08055555555",
    }
