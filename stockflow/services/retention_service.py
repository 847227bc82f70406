from datetime import datetime, timedelta, timezone

from sqlalchemy import delete

from stockflow.core.config import settings
from stockflow.core.observability import log_event
from stockflow.db.store import Store
from stockflow.models.inventory import InventoryLog


def retention_cutoff(now: datetime | None = None, *, retention_days: int | None = None) -> datetime:
    days = retention_days if retention_days is not None else settings.inventory_log_retention_days
    return (now or datetime.now(timezone.utc)) - timedelta(days=days)


def purge_expired_inventory_logs(
    store: Store,
    *,
    now: datetime | None = None,
    retention_days: int | None = None,
) -> int:
    """Deletes log rows created before the retention cutoff. Returns the row count."""
    cutoff = retention_cutoff(now, retention_days=retention_days)
    deleted = store.run_in_transaction(
        lambda tx: tx.execute(
            delete(InventoryLog)
            .where(InventoryLog.created_at < cutoff)
            .execution_options(synchronize_session=False)
        ).rowcount
    )
    log_event("inventory_logs.purged", cutoff=cutoff.isoformat(), deleted=deleted)
    return deleted
