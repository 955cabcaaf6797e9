# inventory_engine/services/bom_catalog.py

from sqlalchemy.orm import Session, selectinload

from inventory_engine.models.production import BillOfMaterials, MaterialLine


def find_by_output_product(db: Session, product_id: int) -> BillOfMaterials | None:
    """Return the first recipe producing ``product_id``, or None to sell straight from stock."""
    return (
        db.query(BillOfMaterials)
        .options(
            selectinload(BillOfMaterials.materials).joinedload(MaterialLine.material)
        )
        .filter(BillOfMaterials.product_id == product_id)
        .order_by(BillOfMaterials.id)
        .first()
    )
