from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from stockflow.core.errors import DuplicateSku, NotFound, UniqueConstraintViolation, ValidationError
from stockflow.core.id_utils import generate_shortuuid
from stockflow.core.observability import log_event
from stockflow.db.store import Store
from stockflow.models.inventory import Inventory
from stockflow.models.product import Product
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse
from stockflow.services.validation import ProductDraft, validate_product_create


def _check_references(store: Store, draft: ProductDraft) -> None:
    warehouse = store.find_one(Warehouse, id=draft.warehouse_id, not_found="Warehouse not found.")

    if draft.supplier_id:
        supplier = store.find_one(Supplier, id=draft.supplier_id, not_found="Supplier not found.")
        if supplier.company_id != warehouse.company_id:
            raise ValidationError("supplier_id", "supplier belongs to a different company than the warehouse")

    if draft.bundle_components:
        component_ids = [component["component_id"] for component in draft.bundle_components]
        found = {product.id for product in store.find_many(Product, Product.id.in_(component_ids))}
        missing = [component_id for component_id in component_ids if component_id not in found]
        if missing:
            raise NotFound(f"Bundle component product not found: {missing[0]}")


def create_product(
    store: Store,
    *,
    name: Any,
    sku: Any,
    price: Decimal | int | float | str | None,
    warehouse_id: Any,
    initial_quantity: Any,
    supplier_id: str | None = None,
    low_stock_threshold: int | None = None,
    is_bundle: bool = False,
    bundle_components: Iterable[Any] | None = None,
) -> str:
    """
    Creates a product and its first inventory row in one transaction.

    The sku lookup only exists to return a clean 409 early; the unique index on
    ``products.sku`` decides races, and a violation at flush or commit is
    reported as ``DuplicateSku`` too. Neither row is visible unless both commit.
    """
    draft = validate_product_create(
        name=name,
        sku=sku,
        price=price,
        warehouse_id=warehouse_id,
        initial_quantity=initial_quantity,
        supplier_id=supplier_id,
        low_stock_threshold=low_stock_threshold,
        is_bundle=is_bundle,
        bundle_components=bundle_components,
    )
    _check_references(store, draft)

    if store.find_one_or_none(Product, sku=draft.sku) is not None:
        raise DuplicateSku(draft.sku)

    product_id = generate_shortuuid()

    def _provision(tx: Store) -> str:
        tx.insert(
            Product(
                id=product_id,
                name=draft.name,
                sku=draft.sku,
                price=draft.price,
                supplier_id=draft.supplier_id,
                low_stock_threshold=draft.low_stock_threshold,
                is_bundle=draft.is_bundle,
                bundle_components=draft.bundle_components or None,
            )
        )
        tx.insert(
            Inventory(
                id=generate_shortuuid(),
                product_id=product_id,
                warehouse_id=draft.warehouse_id,
                quantity=draft.initial_quantity,
            )
        )
        return product_id

    try:
        store.run_in_transaction(_provision)
    except UniqueConstraintViolation:
        log_event("product.duplicate_sku_race", sku=draft.sku)
        raise DuplicateSku(draft.sku) from None

    log_event(
        "product.created",
        product_id=product_id,
        sku=draft.sku,
        warehouse_id=draft.warehouse_id,
        initial_quantity=draft.initial_quantity,
    )
    return product_id


def get_product(store: Store, product_id: str) -> tuple[Product, list[Inventory]]:
    product = store.find_one(Product, id=product_id, not_found="Product not found.")
    inventory = store.find_many(
        Inventory,
        Inventory.product_id == product.id,
        order_by=(Inventory.warehouse_id.asc(),),
    )
    return product, inventory
