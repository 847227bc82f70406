from fastapi import APIRouter, Depends, Query

from stockflow.core.api_docs import error_responses
from stockflow.core.deps import get_store
from stockflow.db.store import Store
from stockflow.schemas.common import PaginationMeta
from stockflow.schemas.inventory import (
    InventoryLogEntryOut,
    InventoryLogListOut,
    StockAdjustIn,
    StockLevelOut,
)
from stockflow.services.inventory_service import adjust_stock, get_stock_level, list_inventory_logs

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "/adjust",
    response_model=StockLevelOut,
    summary="Apply a stock change (sale, restock, adjustment, damage)",
    responses=error_responses(400, 404, 409, 422, 500),
)
def adjust_stock_endpoint(
    payload: StockAdjustIn,
    store: Store = Depends(get_store),
):
    quantity = adjust_stock(
        store,
        product_id=payload.product_id,
        warehouse_id=payload.warehouse_id,
        delta=payload.delta,
        reason=payload.reason,
    )
    return StockLevelOut(
        product_id=payload.product_id,
        warehouse_id=payload.warehouse_id,
        quantity=quantity,
    )


@router.get(
    "/stock",
    response_model=StockLevelOut,
    summary="Get stock level for a product in a warehouse",
    responses=error_responses(404, 422, 500),
)
def get_stock_endpoint(
    product_id: str = Query(..., description="Product id"),
    warehouse_id: str = Query(..., description="Warehouse id"),
    store: Store = Depends(get_store),
):
    row = get_stock_level(store, product_id=product_id, warehouse_id=warehouse_id)
    return StockLevelOut(product_id=row.product_id, warehouse_id=row.warehouse_id, quantity=row.quantity)


@router.get(
    "/logs",
    response_model=InventoryLogListOut,
    summary="List stock change history, oldest first",
    responses=error_responses(422, 500),
)
def list_inventory_logs_endpoint(
    product_id: str | None = Query(default=None, description="Optional product filter"),
    warehouse_id: str | None = Query(default=None, description="Optional warehouse filter"),
    limit: int = Query(default=50, ge=1, le=200, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    store: Store = Depends(get_store),
):
    rows, total = list_inventory_logs(
        store,
        product_id=product_id,
        warehouse_id=warehouse_id,
        limit=limit,
        offset=offset,
    )
    items = [
        InventoryLogEntryOut(
            id=row.id,
            product_id=row.product_id,
            warehouse_id=row.warehouse_id,
            old_quantity=row.old_quantity,
            new_quantity=row.new_quantity,
            change_reason=row.change_reason,
            created_at=row.created_at,
        )
        for row in rows
    ]
    count = len(items)
    return InventoryLogListOut(
        items=items,
        pagination=PaginationMeta(
            total=total,
            limit=limit,
            offset=offset,
            count=count,
            has_next=(offset + count) < total,
        ),
    )
