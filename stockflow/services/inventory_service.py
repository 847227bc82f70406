import logging

from sqlalchemy import func, select
from sqlalchemy.orm.exc import StaleDataError

from stockflow.core.config import settings
from stockflow.core.errors import ConcurrentUpdate, UniqueConstraintViolation
from stockflow.core.id_utils import generate_shortuuid
from stockflow.core.observability import log_event
from stockflow.db.store import Store
from stockflow.models.inventory import Inventory, InventoryLog
from stockflow.models.product import Product
from stockflow.models.warehouse import Warehouse
from stockflow.services.validation import ensure_non_negative, validate_stock_change


def add_log_entry(
    store: Store,
    *,
    product_id: str,
    warehouse_id: str,
    old_quantity: int,
    new_quantity: int,
    reason: str,
) -> InventoryLog:
    entry = InventoryLog(
        product_id=product_id,
        warehouse_id=warehouse_id,
        old_quantity=old_quantity,
        new_quantity=new_quantity,
        change_reason=reason,
    )
    return store.insert(entry)


def _apply_stock_change(
    tx: Store,
    *,
    product_id: str,
    warehouse_id: str,
    delta: int,
    reason: str,
) -> int:
    row = tx.find_one_or_none(Inventory, for_update=True, product_id=product_id, warehouse_id=warehouse_id)
    if row is None:
        tx.find_one(Product, id=product_id, not_found="Product not found.")
        tx.find_one(Warehouse, id=warehouse_id, not_found="Warehouse not found.")
        old_quantity = 0
    else:
        old_quantity = row.quantity

    new_quantity = ensure_non_negative(old_quantity, delta)

    if row is None:
        tx.insert(
            Inventory(
                id=generate_shortuuid(),
                product_id=product_id,
                warehouse_id=warehouse_id,
                quantity=new_quantity,
            )
        )
    else:
        row.quantity = new_quantity

    add_log_entry(
        tx,
        product_id=product_id,
        warehouse_id=warehouse_id,
        old_quantity=old_quantity,
        new_quantity=new_quantity,
        reason=reason,
    )
    return new_quantity


def adjust_stock(
    store: Store,
    *,
    product_id: str,
    warehouse_id: str,
    delta: int,
    reason: str,
) -> int:
    """
    Applies ``delta`` to one (product, warehouse) stock row and appends the
    matching log entry in the same transaction.

    The row is read ``FOR UPDATE`` and written with a version check, so two
    writers on the same key cannot both commit from the same old quantity. The
    loser is rolled back and retried up to ``stock_adjust_max_attempts`` times.
    """
    reason = validate_stock_change(reason, delta)

    max_attempts = settings.stock_adjust_max_attempts
    for attempt in range(1, max_attempts + 1):
        try:
            new_quantity = store.run_in_transaction(
                lambda tx: _apply_stock_change(
                    tx,
                    product_id=product_id,
                    warehouse_id=warehouse_id,
                    delta=delta,
                    reason=reason,
                )
            )
        except (StaleDataError, UniqueConstraintViolation):
            log_event(
                "inventory.adjust_conflict",
                level=logging.WARNING,
                product_id=product_id,
                warehouse_id=warehouse_id,
                attempt=attempt,
            )
            continue

        log_event(
            "inventory.adjusted",
            product_id=product_id,
            warehouse_id=warehouse_id,
            delta=delta,
            reason=reason,
            new_quantity=new_quantity,
        )
        return new_quantity

    raise ConcurrentUpdate()


def get_stock_level(store: Store, *, product_id: str, warehouse_id: str) -> Inventory:
    return store.find_one(
        Inventory,
        not_found="Inventory record not found.",
        product_id=product_id,
        warehouse_id=warehouse_id,
    )


def list_inventory_logs(
    store: Store,
    *,
    product_id: str | None = None,
    warehouse_id: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[InventoryLog], int]:
    criteria = []
    if product_id:
        criteria.append(InventoryLog.product_id == product_id)
    if warehouse_id:
        criteria.append(InventoryLog.warehouse_id == warehouse_id)

    total = int(store.execute(select(func.count(InventoryLog.id)).where(*criteria)).scalar_one())
    rows = store.find_many(
        InventoryLog,
        *criteria,
        order_by=(InventoryLog.id.asc(),),
        offset=offset,
        limit=limit,
    )
    return rows, total
