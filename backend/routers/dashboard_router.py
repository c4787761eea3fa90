# backend/routers/dashboard_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User
from routers.bookings_router import booking_out
from routers.dependencies import get_current_user
from schemas.dashboard import DashboardBooking, DashboardStats, ProviderDashboard
from schemas.profiles import LogisticsProfileOut, MechanicProfileOut
from services import dashboard_service
from services.booking_service import MECHANIC

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return dashboard_service.stats_for(db, user)


@router.get("/provider", response_model=ProviderDashboard)
def get_provider_dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    data = dashboard_service.provider_dashboard(db, user)
    cfg = dashboard_service.PROVIDER_CONFIGS[user.role]
    profile_schema = MechanicProfileOut if cfg is MECHANIC else LogisticsProfileOut

    # ORM rows carry no "type" discriminator, convert before assembling
    return ProviderDashboard(
        kind=data["kind"],
        profile=profile_schema.model_validate(data["profile"]),
        stats=data["stats"],
        bookings=[
            DashboardBooking(booking=booking_out(cfg, row["booking"]).model_dump(), display=row["display"], actions=row["actions"])
            for row in data["bookings"]
        ],
        poll_interval_seconds=data["poll_interval_seconds"],
    )
