# backend/services/notification_service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from models.notification_model import Notification

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    user_id: Optional[int],
    title: str,
    message: str,
    type_: str = "SYSTEM",
    link: Optional[str] = None,
) -> Optional[Notification]:
    """Queue an in-app notification on the caller's session (committed with it)."""
    if not user_id:
        return None
    try:
        n = Notification(user_id=user_id, type=type_, title=title, message=message, link=link)
        db.add(n)
        return n
    except Exception as e:
        # a failed notification never fails the request that triggered it
        logger.warning(f"Notification for user {user_id} failed: {e}")
        return None


def humanize_status(status: str) -> str:
    return status.lower().replace("_", " ")


def list_notifications(db: Session, user_id: int, unread_only: bool = False, limit: int = 50):
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        q = q.filter(Notification.read.is_(False))
    return q.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).all()


def unread_counts(db: Session, user_id: int) -> dict:
    rows = (
        db.query(Notification.type, Notification.id)
        .filter(Notification.user_id == user_id, Notification.read.is_(False))
        .all()
    )
    by_type: dict = {}
    for type_, _ in rows:
        by_type[type_] = by_type.get(type_, 0) + 1
    return {"total": len(rows), "by_type": by_type}
