"""create_consumption_tables

Revision ID: 5c1f0e9a7b21
Revises:
Create Date: 2026-10-19 09:12:44.418220
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1f0e9a7b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # USERS
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("role IN ('Owner', 'Admin', 'Staff')", name="ck_users_role_valid"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # INVENTORY
    op.create_table(
        "inventory",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("product", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("stock", sa.Numeric(18, 6), nullable=False),
        sa.Column("limit", sa.Numeric(18, 6), nullable=True),
        sa.Column("last_notified", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("stock >= 0", name="ck_inventory_stock_non_negative"),
        sa.CheckConstraint(
            "category IN ('product', 'material', 'packaging')",
            name="ck_inventory_category_valid",
        ),
        sa.CheckConstraint(
            "unit IN ('gram', 'Kg', 'ml', 'Litre', 'Pcs', 'Box')",
            name="ck_inventory_unit_valid",
        ),
    )
    op.create_index("ix_inventory_id", "inventory", ["id"])
    op.create_index("ix_inventory_code", "inventory", ["code"], unique=True)

    # BILL OF MATERIALS
    op.create_table(
        "productions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("inventory.id"), nullable=False),
    )
    op.create_index("ix_productions_id", "productions", ["id"])
    op.create_index("ix_productions_product_id", "productions", ["product_id"])

    op.create_table(
        "production_materials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "production_id",
            sa.Integer(),
            sa.ForeignKey("productions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("material_id", sa.Integer(), sa.ForeignKey("inventory.id"), nullable=False),
        sa.Column("qty", sa.Numeric(18, 6), nullable=False),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.CheckConstraint("qty > 0", name="ck_material_qty_positive"),
    )
    op.create_index("ix_production_materials_id", "production_materials", ["id"])
    op.create_index("ix_production_materials_production_id", "production_materials", ["production_id"])
    op.create_index("ix_production_materials_material_id", "production_materials", ["material_id"])

    # SALES ORDERS
    op.create_table(
        "sales_orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("customer_id", sa.String(), nullable=True),
        sa.Column("customer_name", sa.String(), nullable=True),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("payment_status", sa.String(), nullable=False),
        sa.Column("channel", sa.String(), nullable=False),
        sa.Column("tag", sa.String(), nullable=True),
        sa.Column("memo", sa.Text(), nullable=True),
        sa.Column("order_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_sales_orders_id", "sales_orders", ["id"])
    op.create_index("ix_sales_orders_user_id", "sales_orders", ["user_id"])
    op.create_index("ix_sales_orders_customer_id", "sales_orders", ["customer_id"])
    op.create_index("ix_sales_orders_order_date", "sales_orders", ["order_date"])
    op.create_index(
        "ix_sales_orders_user_order_date",
        "sales_orders",
        ["user_id", "order_date"],
        unique=False,
    )

    # SALES ITEMS
    op.create_table(
        "sales_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sales_order_id", sa.Integer(), sa.ForeignKey("sales_orders.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("inventory.id"), nullable=False),
        sa.Column("quantity", sa.Numeric(18, 6), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("line_total", sa.Numeric(12, 2), nullable=False),
    )
    op.create_index("ix_sales_items_id", "sales_items", ["id"])
    op.create_index("ix_sales_items_sales_order_id", "sales_items", ["sales_order_id"])
    op.create_index("ix_sales_items_product_id", "sales_items", ["product_id"])

    # INVOICES
    op.create_table(
        "sales_invoices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "sales_order_id",
            sa.Integer(),
            sa.ForeignKey("sales_orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_method", sa.String(), nullable=False),
        sa.Column("bank_name", sa.String(), nullable=True),
        sa.Column("account_number", sa.String(), nullable=True),
        sa.Column("payment_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("amount >= 0", name="ck_invoice_amount_non_negative"),
    )
    op.create_index("ix_sales_invoices_id", "sales_invoices", ["id"])
    op.create_index("ix_sales_invoices_sales_order_id", "sales_invoices", ["sales_order_id"])

    # NOTIFICATIONS
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column(
            "related_id",
            sa.Integer(),
            sa.ForeignKey("inventory.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])
    op.create_index("ix_notifications_related_id", "notifications", ["related_id"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("notifications")
    op.drop_table("sales_invoices")
    op.drop_table("sales_items")
    op.drop_table("sales_orders")
    op.drop_table("production_materials")
    op.drop_table("productions")
    op.drop_table("inventory")
    op.drop_table("users")
