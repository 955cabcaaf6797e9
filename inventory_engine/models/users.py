# inventory_engine/models/users.py

from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime
from sqlalchemy.sql import func

from inventory_engine.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)

    # Owner and Admin manage the catalog, Staff runs the POS
    role = Column(String, nullable=False, default="Staff")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("role IN ('Owner', 'Admin', 'Staff')", name="ck_users_role_valid"),
    )
