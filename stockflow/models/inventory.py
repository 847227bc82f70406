from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from stockflow.db.base import Base

CHANGE_REASONS: tuple[str, ...] = ("sale", "restock", "adjustment", "damage")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Inventory(Base):
    """
    Current quantity of one product in one warehouse. ``version`` is bumped by
    the ORM on every update and checked in the UPDATE's WHERE clause, so a
    concurrent writer fails with StaleDataError instead of losing an update.
    """
    __tablename__ = "inventory"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    product_id: Mapped[str] = mapped_column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    warehouse_id: Mapped[str] = mapped_column(String(36), ForeignKey("warehouses.id"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        UniqueConstraint("product_id", "warehouse_id", name="uq_inventory_product_warehouse"),
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        Index("ix_inventory_warehouse_quantity", "warehouse_id", "quantity"),
    )


class InventoryLog(Base):
    """
    One row per committed stock mutation. Rows are never updated; they are
    only deleted by the retention purge once past the retention window.
    """
    __tablename__ = "inventory_logs"

    # Autoincrement id doubles as the append order.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[str] = mapped_column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    warehouse_id: Mapped[str] = mapped_column(String(36), ForeignKey("warehouses.id"), nullable=False, index=True)
    old_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    new_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    change_reason: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        index=True,
    )

    __table_args__ = (
        CheckConstraint(
            "change_reason IN ('sale', 'restock', 'adjustment', 'damage')",
            name="ck_inventory_logs_change_reason",
        ),
        Index(
            "ix_inventory_logs_product_warehouse_id",
            "product_id",
            "warehouse_id",
            "id",
        ),
    )
