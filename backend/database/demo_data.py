# backend/database/demo_data.py
"""Demo data for the marketplace: one account per role, approved provider
profiles, a few parts and one order / booking of each kind."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from models.booking_model import MechanicBooking, LogisticsBooking
from models.logistics_model import LogisticsProfile
from models.mechanic_model import MechanicProfile
from models.order_item_model import OrderItem
from models.order_model import Order
from models.product_model import Product
from models.supplier_model import SupplierProfile
from models.user_model import User
from services.order_service import order_total
from services.pricing import estimate_delivery_price
from services.tracking_service import LOGISTICS_EVENTS, ORDER_EVENTS, record_event, unique_code

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo1234"

DEMO_USERS = [
    {"name": "Admin", "email": "admin@demo.example.com", "role": "ADMIN", "phone": "08000000000"},
    {"name": "Ada Buyer", "email": "buyer@demo.example.com", "role": "BUYER", "phone": "08011111111"},
    {"name": "Parts Hub", "email": "supplier@demo.example.com", "role": "SUPPLIER", "phone": "08022222222"},
    {"name": "Musa Mechanic", "email": "mechanic@demo.example.com", "role": "MECHANIC", "phone": "08033333333"},
    {"name": "Swift Haulage", "email": "logistics@demo.example.com", "role": "LOGISTICS", "phone": "08044444444"},
]

DEMO_PRODUCTS = [
    ("Brake Pads (Front)", "Ceramic front brake pads", "18500", 40, "Brakes"),
    ("Oil Filter", "Spin-on oil filter, most sedans", "4500", 120, "Filters"),
    ("Spark Plug Set", "Iridium spark plugs, set of 4", "22000", 25, "Ignition"),
    ("Alternator", "Remanufactured 90A alternator", "95000", 6, "Electrical"),
]


def _user(db: Session, row: dict) -> User:
    u = User(
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        role=row["role"],
        password_hash=generate_password_hash(DEMO_PASSWORD),
    )
    db.add(u)
    db.flush()
    return u


def create_demo_data(db: Session) -> bool:
    """Seed the demo accounts. Returns False when they already exist."""
    if db.query(User).filter(User.email == DEMO_USERS[0]["email"]).first():
        logger.info("Demo data already present")
        return False

    try:
        users = {row["role"]: _user(db, row) for row in DEMO_USERS}

        supplier = SupplierProfile(
            user_id=users["SUPPLIER"].id, business_name="Parts Hub Ltd", description="OEM and aftermarket parts",
            phone="08022222222", address="12 Ladipo Market", city="Lagos", state="Lagos",
            verified=True, approved=True, rating=4.5,
        )
        mechanic = MechanicProfile(
            user_id=users["MECHANIC"].id, business_name="Musa Auto Works", specialization="Brakes, Engine",
            phone="08033333333", address="4 Workshop Close", city="Lagos", state="Lagos",
            verified=True, approved=True, rating=4.2,
        )
        driver = LogisticsProfile(
            user_id=users["LOGISTICS"].id, company_name="Swift Haulage", vehicle_type="Van",
            vehicle_number="LAG-123-XY", phone="08044444444", city="Lagos", state="Lagos",
            coverage_areas="Lagos,Ibadan,Abeokuta", verified=True, approved=True, rating=4.0,
        )
        db.add_all([supplier, mechanic, driver])
        db.flush()

        products = []
        for name, description, price, stock, category in DEMO_PRODUCTS:
            p = Product(supplier_id=supplier.id, name=name, description=description, price=Decimal(price),
                        stock=stock, category=category, status="ACTIVE")
            db.add(p)
            products.append(p)
        db.flush()

        buyer = users["BUYER"]
        first = products[0]
        order = Order(
            tracking_id=unique_code(db, Order.tracking_id, "EDM"),
            user_id=buyer.id,
            total=order_total(Decimal(str(first.price)) * 2),
            status="PENDING",
            payment_method="bank_transfer",
            ship_full_name=buyer.name, ship_phone=buyer.phone,
            ship_address="7 Allen Avenue", ship_city="Lagos", ship_state="Lagos",
        )
        db.add(order)
        db.flush()
        db.add(OrderItem(order_id=order.id, product_id=first.id, name=first.name, price=first.price, quantity=2))
        first.stock -= 2

        db.add(MechanicBooking(
            user_id=buyer.id, mechanic_id=mechanic.id,
            vehicle_make="Toyota", vehicle_model="Corolla", vehicle_year="2015", plate_number="KJA-456-AB",
            service_type="Brake Service", estimated_price=Decimal("15000"),
            date="2026-11-02", time="10:00", location="WORKSHOP",
            address="4 Workshop Close", city="Lagos", state="Lagos", phone=buyer.phone, status="PENDING",
        ))
        delivery = LogisticsBooking(
            user_id=buyer.id, driver_id=driver.id,
            package_type="medium", package_description="Gearbox", weight=35.0, delivery_speed="EXPRESS",
            pickup_address="12 Ladipo Market", pickup_city="Lagos", pickup_state="Lagos",
            delivery_address="22 Ring Road", delivery_city="Ibadan", delivery_state="Oyo",
            recipient_name=buyer.name, recipient_phone=buyer.phone, phone=buyer.phone,
            tracking_number=unique_code(db, LogisticsBooking.tracking_number, "TRK"),
            estimated_price=estimate_delivery_price("EXPRESS", "medium", 35.0),
            status="PENDING",
        )
        db.add(delivery)
        db.flush()
        record_event(db, ORDER_EVENTS, order.id, order.status, order.ship_city)
        record_event(db, LOGISTICS_EVENTS, delivery.id, delivery.status, delivery.pickup_city)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Demo data creation failed: {e}")
        raise

    logger.info(f"Demo data created; every account uses password {DEMO_PASSWORD!r}")
    return True


if __name__ == "__main__":
    from database.session import SessionLocal, init_db

    logging.basicConfig(level=logging.INFO)
    init_db()
    with SessionLocal() as session:
        create_demo_data(session)
