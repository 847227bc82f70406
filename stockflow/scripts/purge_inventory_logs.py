"""
Delete inventory log rows older than the retention window.

Run on a schedule (cron, k8s CronJob):
  python -m stockflow.scripts.purge_inventory_logs
  python -m stockflow.scripts.purge_inventory_logs --retention-days 365
"""

import argparse

from stockflow.core.config import settings
from stockflow.core.observability import setup_observability
from stockflow.db.session import SessionLocal
from stockflow.db.store import Store
from stockflow.services.retention_service import purge_expired_inventory_logs


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    p.add_argument(
        "--retention-days",
        type=int,
        default=settings.inventory_log_retention_days,
        help="Keep log rows younger than this many days",
    )
    args = p.parse_args(argv)

    setup_observability()
    db = SessionLocal()
    try:
        deleted = purge_expired_inventory_logs(Store(db), retention_days=args.retention_days)
    finally:
        db.close()
    print(f"Deleted {deleted} inventory log rows older than {args.retention_days} days")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
