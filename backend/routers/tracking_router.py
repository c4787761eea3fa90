# backend/routers/tracking_router.py
# Public lookups: tracking codes and delivery price quotes.
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.session import get_db
from schemas.bookings import PriceQuote
from schemas.tracking import TrackingView
from services import pricing, tracking_service

router = APIRouter(tags=["tracking"])


@router.get("/track", response_model=TrackingView)
def track(id: Optional[str] = Query(default=None, description="EDM-/TRK- code or numeric order id"),
          db: Session = Depends(get_db)):
    return tracking_service.track(db, id)


@router.get("/pricing/logistics", response_model=PriceQuote)
def logistics_quote(
    speed: str = Query(default="STANDARD"),
    package_type: Optional[str] = Query(default=None),
    weight: float = Query(default=0.0, ge=0),
):
    return pricing.quote(speed, package_type, weight)
