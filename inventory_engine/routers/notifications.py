# inventory_engine/routers/notifications.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from inventory_engine.database import get_db
from inventory_engine.core.auth import MANAGER_ROLES, SALES_ROLES, require_roles
from inventory_engine.models.notifications import Notification
from inventory_engine.schemas.notification import NotificationResponse
from inventory_engine.services import notifier

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*SALES_ROLES)),
):
    query = db.query(Notification)

    if unread_only:
        query = query.filter(Notification.is_read.is_(False))

    return (
        query
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


@router.patch("/{notification_id}", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*SALES_ROLES)),
):
    notification = db.get(Notification, notification_id)

    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    notification.is_read = True
    db.commit()
    db.refresh(notification)

    return notification


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*SALES_ROLES)),
):
    notification = db.get(Notification, notification_id)

    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    db.delete(notification)
    db.commit()


@router.post("/sweep", response_model=list[NotificationResponse])
def sweep_low_stock(
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*MANAGER_ROLES)),
):
    """Scheduled stock check; call it from cron once a day."""
    return notifier.sweep_low_stock(db)
