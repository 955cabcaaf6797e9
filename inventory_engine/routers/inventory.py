# inventory_engine/routers/inventory.py
#
# Read-only stock view. Restocking and catalog edits live elsewhere.

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from inventory_engine.database import get_db
from inventory_engine.core.auth import SALES_ROLES, require_roles
from inventory_engine.models.inventory import InventoryItem
from inventory_engine.schemas.inventory import InventoryResponse

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
)


@router.get("", response_model=list[InventoryResponse])
def list_inventory(
    category: str | None = Query(None),
    low_stock: bool = Query(False),
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*SALES_ROLES)),
):
    query = db.query(InventoryItem)

    if category:
        query = query.filter(InventoryItem.category == category)

    if low_stock:
        query = query.filter(
            or_(
                InventoryItem.stock <= 0,
                (InventoryItem.limit.isnot(None)) & (InventoryItem.stock <= InventoryItem.limit),
            )
        )

    return query.order_by(InventoryItem.id).all()


@router.get("/{item_id}", response_model=InventoryResponse)
def get_inventory_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*SALES_ROLES)),
):
    item = db.get(InventoryItem, item_id)

    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")

    return item
