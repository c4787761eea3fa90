# backend/schemas/__init__.py

# users
from .users import RegisterPayload, RegisterResponse, LoginPayload, LoginResponse, UserOut, UserMini

# profiles
from .profiles import (
    SupplierProfileCreate, SupplierProfileUpdate, SupplierProfileOut,
    MechanicProfileCreate, MechanicProfileUpdate, MechanicProfileOut,
    LogisticsProfileCreate, LogisticsProfileUpdate, LogisticsProfileOut,
    RatingUpdate, ApprovalResult,
)

# products
from .products import ProductCreate, ProductUpdate, ProductOut, StockUpdate

# orders
from .orders import (
    OrderCreate, OrderResponse, OrderStatus, OrderItemIn, OrderItemResponse,
    OrderStatusUpdate, ShippingAddress, StatusChangeResult,
)

# bookings
from .bookings import (
    MechanicBookingCreate, LogisticsBookingCreate, BookingStatusUpdate,
    MechanicBookingOut, LogisticsBookingOut, AnyBooking, PriceQuote,
)

# tracking / dashboards / notifications
from .tracking import TrackingView, TimelineStep, TrackingEventOut
from .dashboard import DashboardStats, ProviderDashboard
from .notifications import NotificationOut, NotificationCounts

__all__ = [
    # users
    "RegisterPayload", "RegisterResponse", "LoginPayload", "LoginResponse", "UserOut", "UserMini",
    # profiles
    "SupplierProfileCreate", "SupplierProfileUpdate", "SupplierProfileOut",
    "MechanicProfileCreate", "MechanicProfileUpdate", "MechanicProfileOut",
    "LogisticsProfileCreate", "LogisticsProfileUpdate", "LogisticsProfileOut",
    "RatingUpdate", "ApprovalResult",
    # products
    "ProductCreate", "ProductUpdate", "ProductOut", "StockUpdate",
    # orders
    "OrderCreate", "OrderResponse", "OrderStatus", "OrderItemIn", "OrderItemResponse",
    "OrderStatusUpdate", "ShippingAddress", "StatusChangeResult",
    # bookings
    "MechanicBookingCreate", "LogisticsBookingCreate", "BookingStatusUpdate",
    "MechanicBookingOut", "LogisticsBookingOut", "AnyBooking", "PriceQuote",
    # tracking / dashboards / notifications
    "TrackingView", "TimelineStep", "TrackingEventOut", "DashboardStats", "ProviderDashboard",
    "NotificationOut", "NotificationCounts",
]
