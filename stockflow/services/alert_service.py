"""
Low-stock alerts for a company.

The whole report is one SELECT: inventory joined to its warehouse (scoped to
the company) and product, with the product's supplier outer-joined. There are
no per-row supplier or warehouse lookups, so the cost stays one round trip no
matter how many warehouses or products the company has.
"""

from dataclasses import dataclass

from sqlalchemy import select

from stockflow.db.store import Store
from stockflow.models.inventory import Inventory
from stockflow.models.product import Product
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse


@dataclass(frozen=True)
class AlertSupplier:
    id: str
    name: str
    contact_email: str | None


@dataclass(frozen=True)
class LowStockAlert:
    product_id: str
    product_name: str
    sku: str
    warehouse_id: str
    warehouse_name: str
    current_stock: int
    threshold: int
    supplier: AlertSupplier | None


def low_stock_alerts_query(company_id: str):
    return (
        select(
            Inventory.product_id.label("product_id"),
            Product.name.label("product_name"),
            Product.sku.label("sku"),
            Inventory.warehouse_id.label("warehouse_id"),
            Warehouse.name.label("warehouse_name"),
            Inventory.quantity.label("current_stock"),
            Product.low_stock_threshold.label("threshold"),
            Supplier.id.label("supplier_id"),
            Supplier.name.label("supplier_name"),
            Supplier.contact_email.label("supplier_contact_email"),
        )
        .select_from(Inventory)
        .join(Warehouse, Warehouse.id == Inventory.warehouse_id)
        .join(Product, Product.id == Inventory.product_id)
        .outerjoin(Supplier, Supplier.id == Product.supplier_id)
        .where(
            Warehouse.company_id == company_id,
            Inventory.quantity <= Product.low_stock_threshold,
        )
        .order_by(Inventory.warehouse_id.asc(), Inventory.product_id.asc())
    )


def list_low_stock_alerts(store: Store, company_id: str) -> list[LowStockAlert]:
    rows = store.execute(low_stock_alerts_query(company_id)).mappings().all()
    return [
        LowStockAlert(
            product_id=row["product_id"],
            product_name=row["product_name"],
            sku=row["sku"],
            warehouse_id=row["warehouse_id"],
            warehouse_name=row["warehouse_name"],
            current_stock=int(row["current_stock"]),
            threshold=int(row["threshold"]),
            supplier=(
                AlertSupplier(
                    id=row["supplier_id"],
                    name=row["supplier_name"],
                    contact_email=row["supplier_contact_email"],
                )
                if row["supplier_id"] is not None
                else None
            ),
        )
        for row in rows
    ]
