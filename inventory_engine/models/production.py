# inventory_engine/models/production.py

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from inventory_engine.database import Base


class BillOfMaterials(Base):
    __tablename__ = "productions"

    id = Column(Integer, primary_key=True, index=True)

    # The inventory item this recipe produces
    product_id = Column(Integer, ForeignKey("inventory.id"), nullable=False, index=True)

    product = relationship("InventoryItem")

    materials = relationship(
        "MaterialLine",
        back_populates="production",
        cascade="all, delete-orphan",
        order_by="MaterialLine.position",
    )


class MaterialLine(Base):
    __tablename__ = "production_materials"

    id = Column(Integer, primary_key=True, index=True)

    production_id = Column(Integer, ForeignKey("productions.id", ondelete="CASCADE"), nullable=False, index=True)
    material_id = Column(Integer, ForeignKey("inventory.id"), nullable=False, index=True)

    # Material consumed per unit of output, expressed in `unit`
    qty = Column(Numeric(18, 6), nullable=False)
    unit = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    production = relationship("BillOfMaterials", back_populates="materials")
    material = relationship("InventoryItem")

    __table_args__ = (
        CheckConstraint("qty > 0", name="ck_material_qty_positive"),
    )
