import os
import threading
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, func, inspect, select, text
from sqlalchemy.orm import sessionmaker

import stockflow.models  # noqa: F401
from stockflow.core.config import settings
from stockflow.core.errors import DuplicateSku
from stockflow.core.id_utils import generate_shortuuid
from stockflow.db.base import Base
from stockflow.db.store import Store
from stockflow.models.inventory import InventoryLog
from stockflow.models.product import Product
from stockflow.services.directory_service import create_company, create_warehouse
from stockflow.services.inventory_service import adjust_stock, get_stock_level
from stockflow.services.product_service import create_product


def _test_pg_url() -> str | None:
    return os.getenv("TEST_POSTGRES_DATABASE_URL")


@pytest.fixture()
def pg_session_local():
    url = _test_pg_url()
    if not url:
        pytest.skip("Set TEST_POSTGRES_DATABASE_URL to run Postgres integration tests.")
    engine = create_engine(url, pool_pre_ping=True, pool_size=10)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def _run_concurrently(workers: int, fn) -> list:
    barrier = threading.Barrier(workers)
    results: list = [None] * workers

    def _worker(index: int) -> None:
        barrier.wait()
        try:
            results[index] = fn(index)
        except Exception as exc:  # collected for the assertions
            results[index] = exc

    threads = [threading.Thread(target=_worker, args=(i,)) for i in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results


def _warehouse(session_local) -> str:
    with session_local() as db:
        store = Store(db)
        company = create_company(store, name="Integration Co")
        return create_warehouse(store, company_id=company.id, name="Main").id


@pytest.mark.integration
def test_postgres_connection_and_core_tables(pg_session_local):
    with pg_session_local() as db:
        assert db.execute(text("SELECT 1")).scalar_one() == 1
        table_names = set(inspect(db.get_bind()).get_table_names())

    assert {"companies", "warehouses", "suppliers", "products", "inventory", "inventory_logs"} <= table_names


@pytest.mark.integration
def test_concurrent_same_sku_creation_has_one_winner(pg_session_local):
    warehouse_id = _warehouse(pg_session_local)
    sku = f"RACE-{generate_shortuuid()}"

    def _create(index: int) -> str:
        with pg_session_local() as db:
            return create_product(
                Store(db),
                name=f"Racer {index}",
                sku=sku,
                price=1,
                warehouse_id=warehouse_id,
                initial_quantity=index + 1,
            )

    results = _run_concurrently(4, _create)

    winners = [r for r in results if isinstance(r, str)]
    assert len(winners) == 1
    assert all(isinstance(r, DuplicateSku) for r in results if not isinstance(r, str))
    with pg_session_local() as db:
        assert db.execute(select(func.count(Product.id)).where(Product.sku == sku)).scalar_one() == 1


@pytest.mark.integration
def test_concurrent_adjustments_lose_no_updates(pg_session_local):
    warehouse_id = _warehouse(pg_session_local)
    with pg_session_local() as db:
        product_id = create_product(
            Store(db),
            name="Hot item",
            sku=f"HOT-{generate_shortuuid()}",
            price=1,
            warehouse_id=warehouse_id,
            initial_quantity=100,
        )

    def _sell(index: int) -> int:
        with pg_session_local() as db:
            return adjust_stock(
                Store(db), product_id=product_id, warehouse_id=warehouse_id, delta=-3, reason="sale"
            )

    results = _run_concurrently(10, _sell)

    assert all(isinstance(r, int) for r in results), results
    with pg_session_local() as db:
        store = Store(db)
        assert get_stock_level(store, product_id=product_id, warehouse_id=warehouse_id).quantity == 70
        logs = db.execute(
            select(InventoryLog).where(InventoryLog.product_id == product_id).order_by(InventoryLog.id)
        ).scalars().all()
    assert len(logs) == 10
    assert logs[-1].new_quantity == 70
    for previous, current in zip(logs, logs[1:]):
        assert current.old_quantity == previous.new_quantity


@pytest.mark.integration
def test_alembic_upgrade_downgrade_smoke(monkeypatch):
    url = _test_pg_url()
    if not url:
        pytest.skip("Set TEST_POSTGRES_DATABASE_URL to run migration smoke tests.")
    if os.getenv("ALLOW_DESTRUCTIVE_MIGRATION_TESTS") != "1":
        pytest.skip("Set ALLOW_DESTRUCTIVE_MIGRATION_TESTS=1 for downgrade smoke test.")

    project_root = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    monkeypatch.setattr(settings, "database_url", url)

    command.upgrade(alembic_cfg, "head")
    command.downgrade(alembic_cfg, "base")
    command.upgrade(alembic_cfg, "head")

    engine = create_engine(url)
    try:
        assert "inventory_logs" in set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
