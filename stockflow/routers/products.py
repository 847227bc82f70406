from fastapi import APIRouter, Depends

from stockflow.core.api_docs import error_responses
from stockflow.core.deps import get_store
from stockflow.db.store import Store
from stockflow.schemas.product import (
    BundleComponentOut,
    ProductCreateIn,
    ProductCreateOut,
    ProductInventoryOut,
    ProductOut,
)
from stockflow.services.product_service import create_product, get_product

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    response_model=ProductCreateOut,
    status_code=201,
    summary="Create product with its initial stock",
    responses=error_responses(400, 404, 409, 422, 500),
)
def create_product_endpoint(
    payload: ProductCreateIn,
    store: Store = Depends(get_store),
):
    product_id = create_product(
        store,
        name=payload.name,
        sku=payload.sku,
        price=payload.price,
        warehouse_id=payload.warehouse_id,
        initial_quantity=payload.initial_quantity,
        supplier_id=payload.supplier_id,
        low_stock_threshold=payload.low_stock_threshold,
        is_bundle=payload.is_bundle,
        bundle_components=[
            component.model_dump() for component in (payload.bundle_components or [])
        ],
    )
    return ProductCreateOut(message="Product created successfully", product_id=product_id)


@router.get(
    "/{product_id}",
    response_model=ProductOut,
    summary="Get product with stock per warehouse",
    responses=error_responses(404, 500),
)
def get_product_endpoint(
    product_id: str,
    store: Store = Depends(get_store),
):
    product, inventory = get_product(store, product_id)
    return ProductOut(
        id=product.id,
        name=product.name,
        sku=product.sku,
        price=float(product.price),
        supplier_id=product.supplier_id,
        low_stock_threshold=product.low_stock_threshold,
        is_bundle=product.is_bundle,
        bundle_components=[
            BundleComponentOut(component_id=item["component_id"], quantity=item["quantity"])
            for item in (product.bundle_components or [])
        ],
        inventory=[
            ProductInventoryOut(
                warehouse_id=row.warehouse_id,
                quantity=row.quantity,
                updated_at=row.updated_at,
            )
            for row in inventory
        ],
        created_at=product.created_at,
    )
