# inventory_engine/services/notifier.py

import logging
import math
from datetime import datetime, timedelta, timezone

from sqlalchemy import or_
from sqlalchemy.orm import Session

from inventory_engine.core.config import settings
from inventory_engine.core.units import to_decimal
from inventory_engine.models.inventory import InventoryItem
from inventory_engine.models.notifications import Notification
from inventory_engine.services import inventory_store

logger = logging.getLogger(__name__)


def should_notify(item: InventoryItem) -> bool:
    below_limit = item.limit is not None and item.stock <= item.limit
    return below_limit or item.stock <= 0


def _display(quantity) -> str:
    # 2.000000 -> "2", 2.500000 -> "2.5"
    return f"{to_decimal(quantity).normalize():f}"


def build(item: InventoryItem, is_out_of_stock: bool) -> Notification:
    """
    Stock alert for one item. Fractional stock is floored in the message,
    operators reorder in whole units.
    """
    state = "is out" if is_out_of_stock else "is low"
    floored = math.floor(item.stock)

    message = f"Stock of {item.product} is {floored} left {item.unit}."
    if item.limit is not None:
        message += f" (Limit: {_display(item.limit)})"

    return Notification(
        title=f"The stock of {item.product} {state}",
        message=message,
        type="stock",
        related_id=item.id,
        is_read=False,
    )


def emit(db: Session, notifications: list[Notification]) -> None:
    if not notifications:
        return

    db.add_all(notifications)
    db.flush()

    logger.info(f"Stock alerts raised: {len(notifications)}")


def sweep_low_stock(db: Session, now: datetime | None = None) -> list[Notification]:
    """
    Scheduled scan over the whole catalog.

    Alerts every item that is low or out of stock and has not been alerted
    in the last NOTIFY_DEBOUNCE_HOURS. Commits its own work.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(hours=settings.NOTIFY_DEBOUNCE_HOURS)

    items = (
        db.query(InventoryItem)
        .filter(
            or_(
                InventoryItem.stock <= 0,
                (InventoryItem.limit.isnot(None)) & (InventoryItem.stock <= InventoryItem.limit),
            ),
            or_(
                InventoryItem.last_notified.is_(None),
                InventoryItem.last_notified < cutoff,
            ),
        )
        .order_by(InventoryItem.id)
        .all()
    )

    notifications = []
    for item in items:
        notifications.append(build(item, is_out_of_stock=item.stock <= 0))
        inventory_store.mark_notified(db, item.id, now)

    emit(db, notifications)
    db.commit()

    return notifications
