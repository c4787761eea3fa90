# backend/gateway/gateway_router.py
from fastapi import APIRouter

# business routers, mounted by main.py under /api
from routers.users_router import router as users_router
from routers.profiles_router import router as profiles_router
from routers.products_router import router as products_router
from routers.orders_router import router as orders_router
from routers.bookings_router import router as bookings_router
from routers.tracking_router import router as tracking_router
from routers.dashboard_router import router as dashboard_router
from routers.notifications_router import router as notifications_router
from routers.admin_router import router as admin_router

gateway_router = APIRouter()

# accounts and provider profiles
gateway_router.include_router(users_router)           # /api/users/...
gateway_router.include_router(profiles_router)        # /api/onboarding, /api/profile, public listings

# marketplace
gateway_router.include_router(products_router)        # /api/products/...
gateway_router.include_router(orders_router)          # /api/orders, /api/supplier/orders
gateway_router.include_router(bookings_router)        # /api/bookings/...
gateway_router.include_router(tracking_router)        # /api/track, /api/pricing/...

# dashboards
gateway_router.include_router(dashboard_router)       # /api/dashboard/...
gateway_router.include_router(notifications_router)   # /api/notifications/...
gateway_router.include_router(admin_router)           # /api/admin/...
