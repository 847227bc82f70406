from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from stockflow.db.base import Base


class Product(Base):
    """
    A sellable item. Bundles embed their ordered component list as
    ``[{"component_id": ..., "quantity": n}, ...]``; components are always read
    with the parent, so they are not a separate table.
    """
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)  # global, not per company
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    supplier_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("suppliers.id"), nullable=True, index=True)
    low_stock_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_bundle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="0")
    bundle_components: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("low_stock_threshold >= 0", name="ck_products_low_stock_threshold_non_negative"),
    )
