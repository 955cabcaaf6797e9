# inventory_engine/services/inventory_store.py
#
# Stock primitives used by the consumption engine. Every write happens in
# the caller's session and only becomes visible when that session commits.

from datetime import datetime
from decimal import Decimal
from typing import Iterable

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from inventory_engine.core.exceptions import NotFoundError, ValidationError
from inventory_engine.core.units import STOCK_SCALE, quantize_stock
from inventory_engine.models.inventory import InventoryItem


def get(db: Session, item_id: int) -> InventoryItem:
    item = db.get(InventoryItem, item_id)

    if item is None:
        raise NotFoundError(f"Inventory item {item_id} not found")

    return item


def lock(db: Session, item_ids: Iterable[int]) -> dict[int, InventoryItem]:
    """
    Take row locks on every item a checkout is about to decrement.

    Locks are acquired in ascending id order so two checkouts touching
    overlapping items cannot deadlock. SQLite ignores FOR UPDATE and
    serialises writers on its database lock instead.
    """
    ids = sorted(set(item_ids))
    if not ids:
        return {}

    rows = db.execute(
        select(InventoryItem)
        .where(InventoryItem.id.in_(ids))
        .order_by(InventoryItem.id)
        .with_for_update()
    ).scalars().all()

    return {row.id: row for row in rows}


def decrement(db: Session, item_id: int, amount: Decimal) -> Decimal | None:
    """
    Atomically subtract ``amount`` from an item's stock.

    The subtraction and the sufficiency check are one UPDATE statement, so
    a concurrent checkout can never sneak in between reading and writing
    the counter. Returns the new stock, or None if the row did not hold
    enough stock (nothing is written in that case).

    Both sides are rounded to the stock precision inside the statement.
    SQLite keeps NUMERIC columns as binary floats, and without rounding a
    run of fractional sales drifts below the exact amount still on hand.
    """
    amount = quantize_stock(amount)
    if amount <= 0:
        raise ValidationError(f"Cannot consume {amount} of inventory item {item_id}")

    on_hand = func.round(InventoryItem.stock, STOCK_SCALE)

    result = db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item_id, on_hand >= amount)
        .values(stock=func.round(InventoryItem.stock - amount, STOCK_SCALE))
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        return None

    item = db.get(InventoryItem, item_id)
    db.refresh(item, attribute_names=["stock"])
    return item.stock


def mark_notified(db: Session, item_id: int, timestamp: datetime) -> None:
    db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item_id)
        .values(last_notified=timestamp)
        .execution_options(synchronize_session=False)
    )
