# inventory_engine/models/invoices.py

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from inventory_engine.database import Base


class Invoice(Base):
    __tablename__ = "sales_invoices"

    id = Column(Integer, primary_key=True, index=True)

    sales_order_id = Column(
        Integer,
        ForeignKey("sales_orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, nullable=False)

    # Only filled for bank transfers
    bank_name = Column(String, nullable=True)
    account_number = Column(String, nullable=True)

    payment_date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    sales_order = relationship("SalesOrder", back_populates="invoices")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_invoice_amount_non_negative"),
    )
