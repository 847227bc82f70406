"""
Seed one company with a warehouse, a supplier and a low-stock product.

Run locally (uses DATABASE_URL like the API):
  python -m stockflow.scripts.seed_demo_data
  python -m stockflow.scripts.seed_demo_data --sku WIDGET-002 --quantity 40
"""

import argparse

from stockflow.core.errors import DuplicateSku
from stockflow.core.observability import setup_observability
from stockflow.db.base import Base
from stockflow.db.session import SessionLocal, engine
from stockflow.db.store import Store
from stockflow.models.product import Product
from stockflow.services.directory_service import create_company, create_supplier, create_warehouse
from stockflow.services.product_service import create_product


def seed(store: Store, *, sku: str, quantity: int) -> dict[str, str]:
    # A taken sku fails before any row is written.
    if store.find_one_or_none(Product, sku=sku) is not None:
        raise DuplicateSku(sku)

    company = create_company(store, name="Test Company Inc.")
    supplier = create_supplier(
        store,
        company_id=company.id,
        name="Widgets R Us",
        contact_email="orders@widgetsrus.com",
        contact_phone="+1-555-0123",
    )
    warehouse = create_warehouse(
        store,
        company_id=company.id,
        name="Main Warehouse",
        address="123 Inventory Street, Business City",
    )
    product_id = create_product(
        store,
        name="Premium Widget",
        sku=sku,
        price="29.99",
        warehouse_id=warehouse.id,
        initial_quantity=quantity,
        supplier_id=supplier.id,
        low_stock_threshold=25,
    )
    return {
        "company_id": company.id,
        "warehouse_id": warehouse.id,
        "supplier_id": supplier.id,
        "product_id": product_id,
    }


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    p.add_argument("--sku", default="WIDGET-001")
    p.add_argument("--quantity", type=int, default=10, help="Initial stock for the seeded product")
    p.add_argument("--create-tables", action="store_true", help="Create tables first (dev databases without Alembic)")
    args = p.parse_args(argv)

    setup_observability()
    if args.create_tables:
        import stockflow.models  # noqa: F401

        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ids = seed(Store(db), sku=args.sku, quantity=args.quantity)
    finally:
        db.close()

    for key, value in ids.items():
        print(f"{key}: {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
