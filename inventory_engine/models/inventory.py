# inventory_engine/models/inventory.py

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String

from inventory_engine.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, nullable=False, index=True)
    product = Column(String, nullable=False)
    category = Column(String, nullable=False, default="product")
    unit = Column(String, nullable=False, default="Pcs")

    stock = Column(Numeric(18, 6), nullable=False, default=0)
    limit = Column(Numeric(18, 6), nullable=True)

    # Stamped whenever a stock alert fires for this item
    last_notified = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_inventory_stock_non_negative"),
        CheckConstraint(
            "category IN ('product', 'material', 'packaging')",
            name="ck_inventory_category_valid",
        ),
        CheckConstraint(
            "unit IN ('gram', 'Kg', 'ml', 'Litre', 'Pcs', 'Box')",
            name="ck_inventory_unit_valid",
        ),
    )
