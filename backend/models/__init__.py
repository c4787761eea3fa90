# backend/models/__init__.py
from .user_model import User
from .supplier_model import SupplierProfile
from .mechanic_model import MechanicProfile
from .logistics_model import LogisticsProfile
from .product_model import Product
from .order_model import Order
from .order_item_model import OrderItem
from .booking_model import MechanicBooking, LogisticsBooking
from .notification_model import Notification
from .tracking_event_model import TrackingEvent
