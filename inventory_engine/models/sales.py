# models/sales.py

from sqlalchemy import Column, Index, Integer, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from inventory_engine.database import Base


class SalesOrder(Base):
    __tablename__ = "sales_orders"

    id = Column(Integer, primary_key=True, index=True)

    # Staff member (POS) or user who submitted the order
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    customer_id = Column(String, nullable=True, index=True)
    customer_name = Column(String, nullable=True)

    total = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False)
    payment_status = Column(String, nullable=False)
    channel = Column(String, nullable=False, default="pos")
    tag = Column(String, nullable=True)
    memo = Column(Text, nullable=True)

    order_date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    items = relationship(
        "SalesItem",
        back_populates="sales_order",
        cascade="all, delete-orphan",
        order_by="SalesItem.id",
    )

    invoices = relationship(
        "Invoice",
        back_populates="sales_order",
        cascade="all, delete-orphan",
        order_by="Invoice.id",
    )

    user = relationship("User")

    @property
    def invoice(self):
        # POS orders carry exactly one invoice, created with the order
        return self.invoices[0] if self.invoices else None


    # Composite index for reporting by staff and date
    __table_args__ = (
        Index("ix_sales_orders_user_order_date", "user_id", "order_date"),
    )
