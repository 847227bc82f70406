"""create inventory core tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:30:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(inspector: sa.Inspector, table_name: str) -> bool:
    return table_name in inspector.get_table_names()


def _index_exists(inspector: sa.Inspector, table_name: str, index_name: str) -> bool:
    return index_name in {index["name"] for index in inspector.get_indexes(table_name)}


def _create_index_if_missing(
    inspector: sa.Inspector,
    table_name: str,
    index_name: str,
    columns: list[str],
) -> None:
    if not _index_exists(inspector, table_name, index_name):
        op.create_index(index_name, table_name, columns, unique=False)


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not _table_exists(inspector, "companies"):
        op.create_table(
            "companies",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists(inspector, "warehouses"):
        op.create_table(
            "warehouses",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("company_id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("address", sa.String(length=500), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(["company_id"], ["companies.id"]),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists(inspector, "suppliers"):
        op.create_table(
            "suppliers",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("company_id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("contact_email", sa.String(length=255), nullable=True),
            sa.Column("contact_phone", sa.String(length=50), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(["company_id"], ["companies.id"]),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists(inspector, "products"):
        op.create_table(
            "products",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("sku", sa.String(length=100), nullable=False),
            sa.Column("price", sa.Numeric(12, 2), nullable=False),
            sa.Column("supplier_id", sa.String(length=36), nullable=True),
            sa.Column("low_stock_threshold", sa.Integer(), server_default="0", nullable=False),
            sa.Column("is_bundle", sa.Boolean(), server_default="0", nullable=False),
            sa.Column("bundle_components", sa.JSON(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
            sa.CheckConstraint(
                "low_stock_threshold >= 0",
                name="ck_products_low_stock_threshold_non_negative",
            ),
            sa.ForeignKeyConstraint(["supplier_id"], ["suppliers.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("sku", name="uq_products_sku"),
        )

    if not _table_exists(inspector, "inventory"):
        op.create_table(
            "inventory",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("product_id", sa.String(length=36), nullable=False),
            sa.Column("warehouse_id", sa.String(length=36), nullable=False),
            sa.Column("quantity", sa.Integer(), server_default="0", nullable=False),
            sa.Column("version", sa.Integer(), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
            sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
            sa.ForeignKeyConstraint(["warehouse_id"], ["warehouses.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("product_id", "warehouse_id", name="uq_inventory_product_warehouse"),
        )

    if not _table_exists(inspector, "inventory_logs"):
        op.create_table(
            "inventory_logs",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("product_id", sa.String(length=36), nullable=False),
            sa.Column("warehouse_id", sa.String(length=36), nullable=False),
            sa.Column("old_quantity", sa.Integer(), nullable=False),
            sa.Column("new_quantity", sa.Integer(), nullable=False),
            sa.Column("change_reason", sa.String(length=20), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint(
                "change_reason IN ('sale', 'restock', 'adjustment', 'damage')",
                name="ck_inventory_logs_change_reason",
            ),
            sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
            sa.ForeignKeyConstraint(["warehouse_id"], ["warehouses.id"]),
            sa.PrimaryKeyConstraint("id"),
        )

    inspector = sa.inspect(bind)
    _create_index_if_missing(inspector, "warehouses", "ix_warehouses_company_id", ["company_id"])
    _create_index_if_missing(
        inspector, "warehouses", "ix_warehouses_company_created_at", ["company_id", "created_at"]
    )
    _create_index_if_missing(inspector, "suppliers", "ix_suppliers_company_id", ["company_id"])
    _create_index_if_missing(inspector, "products", "ix_products_supplier_id", ["supplier_id"])
    _create_index_if_missing(inspector, "inventory", "ix_inventory_product_id", ["product_id"])
    _create_index_if_missing(inspector, "inventory", "ix_inventory_warehouse_id", ["warehouse_id"])
    _create_index_if_missing(
        inspector, "inventory", "ix_inventory_warehouse_quantity", ["warehouse_id", "quantity"]
    )
    _create_index_if_missing(inspector, "inventory_logs", "ix_inventory_logs_product_id", ["product_id"])
    _create_index_if_missing(inspector, "inventory_logs", "ix_inventory_logs_warehouse_id", ["warehouse_id"])
    _create_index_if_missing(inspector, "inventory_logs", "ix_inventory_logs_change_reason", ["change_reason"])
    _create_index_if_missing(inspector, "inventory_logs", "ix_inventory_logs_created_at", ["created_at"])
    _create_index_if_missing(
        inspector,
        "inventory_logs",
        "ix_inventory_logs_product_warehouse_id",
        ["product_id", "warehouse_id", "id"],
    )


def downgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table_name in ("inventory_logs", "inventory", "products", "suppliers", "warehouses", "companies"):
        if _table_exists(inspector, table_name):
            op.drop_table(table_name)
