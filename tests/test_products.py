import pytest
from sqlalchemy import func, select

from stockflow.core.errors import DuplicateSku
from stockflow.models.inventory import Inventory
from stockflow.models.product import Product
from stockflow.services.product_service import create_product


def _create_company(client, name: str = "Test Company Inc.") -> str:
    res = client.post("/api/companies", json={"name": name})
    assert res.status_code == 201, res.text
    return res.json()["id"]


def _create_warehouse(client, company_id: str, name: str = "Main Warehouse") -> str:
    res = client.post(f"/api/companies/{company_id}/warehouses", json={"name": name})
    assert res.status_code == 201, res.text
    return res.json()["id"]


def _create_supplier(client, company_id: str) -> str:
    res = client.post(
        f"/api/companies/{company_id}/suppliers",
        json={"name": "Widgets R Us", "contactEmail": "orders@widgetsrus.com"},
    )
    assert res.status_code == 201, res.text
    return res.json()["id"]


def _product_payload(warehouse_id: str, **overrides) -> dict:
    payload = {
        "name": "Widget",
        "sku": "SKU-1",
        "price": 9.99,
        "warehouseId": warehouse_id,
        "initialQuantity": 5,
    }
    payload.update(overrides)
    return payload


def _product_count(session_local, sku: str | None = None) -> int:
    db = session_local()
    try:
        stmt = select(func.count(Product.id))
        if sku is not None:
            stmt = stmt.where(Product.sku == sku)
        return int(db.execute(stmt).scalar_one())
    finally:
        db.close()


def test_create_product_creates_product_and_initial_inventory(test_context):
    client, session_local = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))

    res = client.post("/api/products", json=_product_payload(warehouse_id))
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["message"] == "Product created successfully"
    product_id = body["product_id"]

    db = session_local()
    try:
        product = db.execute(select(Product).where(Product.sku == "SKU-1")).scalar_one()
        inventory = db.execute(
            select(Inventory).where(
                Inventory.product_id == product_id,
                Inventory.warehouse_id == warehouse_id,
            )
        ).scalar_one()
    finally:
        db.close()

    assert product.id == product_id
    assert product.name == "Widget"
    assert float(product.price) == 9.99
    assert product.low_stock_threshold == 0
    assert inventory.quantity == 5


def test_create_product_accepts_snake_case_body(test_context):
    client, _ = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))

    res = client.post(
        "/api/products",
        json={
            "name": "Gadget",
            "sku": "GADGET-1",
            "price": 0,
            "warehouse_id": warehouse_id,
            "initial_quantity": 0,
            "low_stock_threshold": 3,
        },
    )
    assert res.status_code == 201, res.text

    detail = client.get(f"/api/products/{res.json()['product_id']}")
    assert detail.status_code == 200, detail.text
    body = detail.json()
    assert body["price"] == 0.0
    assert body["low_stock_threshold"] == 3
    assert len(body["inventory"]) == 1
    assert body["inventory"][0]["warehouse_id"] == warehouse_id
    assert body["inventory"][0]["quantity"] == 0


def test_duplicate_sku_returns_conflict_without_mutating_storage(test_context):
    client, session_local = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))

    first = client.post("/api/products", json=_product_payload(warehouse_id))
    assert first.status_code == 201, first.text

    second = client.post("/api/products", json=_product_payload(warehouse_id))
    assert second.status_code == 409, second.text
    error = second.json()["error"]
    assert error["code"] == "duplicate_sku"
    assert error["message"] == "A product with this SKU already exists."

    assert _product_count(session_local, "SKU-1") == 1
    assert _product_count(session_local) == 1


def test_unknown_warehouse_returns_not_found_and_creates_nothing(test_context):
    client, session_local = test_context

    res = client.post("/api/products", json=_product_payload("missing-warehouse"))
    assert res.status_code == 404, res.text
    assert res.json()["error"]["code"] == "not_found"
    assert res.json()["error"]["message"] == "Warehouse not found."
    assert _product_count(session_local) == 0


def test_missing_fields_return_bad_request_with_field(test_context):
    client, session_local = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))

    res = client.post("/api/products", json={"name": "Widget", "warehouseId": warehouse_id})
    assert res.status_code == 400, res.text
    error = res.json()["error"]
    assert error["code"] == "invalid_input"
    assert error["details"][0]["field"] == "sku"

    negative = client.post("/api/products", json=_product_payload(warehouse_id, initialQuantity=-1))
    assert negative.status_code == 400, negative.text
    assert negative.json()["error"]["details"][0]["field"] == "initial_quantity"

    negative_price = client.post("/api/products", json=_product_payload(warehouse_id, price=-0.5))
    assert negative_price.status_code == 400, negative_price.text
    assert negative_price.json()["error"]["details"][0]["field"] == "price"

    assert _product_count(session_local) == 0


def test_malformed_types_are_bad_requests_naming_the_field(test_context):
    client, session_local = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))

    cases = [
        ({"price": "abc"}, "price"),
        ({"initialQuantity": 1.5}, "initial_quantity"),
        ({"initialQuantity": "lots"}, "initial_quantity"),
        ({"lowStockThreshold": [3]}, "low_stock_threshold"),
        ({"name": 42}, "name"),
    ]
    for overrides, field in cases:
        res = client.post("/api/products", json=_product_payload(warehouse_id, **overrides))
        assert res.status_code == 400, res.text
        error = res.json()["error"]
        assert error["code"] == "invalid_input"
        assert error["details"][0]["field"] == field
        assert error["retryable"] is False

    assert _product_count(session_local) == 0


def test_values_beyond_column_limits_are_bad_requests(test_context):
    client, session_local = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))

    cases = [
        ({"initialQuantity": 2**64}, "initial_quantity"),
        ({"initialQuantity": 2**31}, "initial_quantity"),
        ({"lowStockThreshold": 2**31}, "low_stock_threshold"),
        ({"price": 1e10}, "price"),
        ({"name": "n" * 256}, "name"),
        ({"sku": "s" * 101}, "sku"),
    ]
    for overrides, field in cases:
        res = client.post("/api/products", json=_product_payload(warehouse_id, **overrides))
        assert res.status_code == 400, res.text
        assert res.json()["error"]["details"][0]["field"] == field

    at_limit = client.post(
        "/api/products",
        json=_product_payload(warehouse_id, initialQuantity=2**31 - 1, price=9999999999.99, sku="s" * 100),
    )
    assert at_limit.status_code == 201, at_limit.text
    assert _product_count(session_local) == 1


def test_supplier_must_belong_to_warehouse_company(test_context):
    client, session_local = test_context
    company_id = _create_company(client)
    warehouse_id = _create_warehouse(client, company_id)
    other_supplier_id = _create_supplier(client, _create_company(client, name="Other Co"))

    res = client.post(
        "/api/products",
        json=_product_payload(warehouse_id, supplierId=other_supplier_id),
    )
    assert res.status_code == 400, res.text
    assert res.json()["error"]["details"][0]["field"] == "supplier_id"

    missing = client.post("/api/products", json=_product_payload(warehouse_id, supplierId="nope"))
    assert missing.status_code == 404, missing.text
    assert missing.json()["error"]["message"] == "Supplier not found."

    own_supplier_id = _create_supplier(client, company_id)
    ok = client.post(
        "/api/products",
        json=_product_payload(warehouse_id, supplierId=own_supplier_id, lowStockThreshold=25),
    )
    assert ok.status_code == 201, ok.text
    assert _product_count(session_local) == 1


def test_bundle_product_embeds_ordered_components(test_context):
    client, _ = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))
    first = client.post("/api/products", json=_product_payload(warehouse_id, sku="PART-A")).json()["product_id"]
    second = client.post("/api/products", json=_product_payload(warehouse_id, sku="PART-B")).json()["product_id"]

    res = client.post(
        "/api/products",
        json=_product_payload(
            warehouse_id,
            sku="KIT-1",
            isBundle=True,
            bundleComponents=[
                {"componentId": second, "quantity": 2},
                {"componentId": first, "quantity": 1},
            ],
        ),
    )
    assert res.status_code == 201, res.text

    detail = client.get(f"/api/products/{res.json()['product_id']}").json()
    assert detail["is_bundle"] is True
    assert detail["bundle_components"] == [
        {"component_id": second, "quantity": 2},
        {"component_id": first, "quantity": 1},
    ]

    unknown = client.post(
        "/api/products",
        json=_product_payload(
            warehouse_id,
            sku="KIT-2",
            isBundle=True,
            bundleComponents=[{"componentId": "ghost", "quantity": 1}],
        ),
    )
    assert unknown.status_code == 404, unknown.text


def test_get_unknown_product_returns_not_found(test_context):
    client, _ = test_context
    res = client.get("/api/products/does-not-exist")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "not_found"


def test_sku_race_detected_at_insert_is_reported_as_duplicate(test_context, store, monkeypatch):
    client, session_local = test_context
    warehouse_id = _create_warehouse(client, _create_company(client))
    create_product(store, name="Widget", sku="SKU-1", price=9.99, warehouse_id=warehouse_id, initial_quantity=5)

    # Blind the pre-check so the unique index is what rejects the second insert.
    original = store.find_one_or_none

    def find_without_sku(model, *, for_update=False, **filters):
        if model is Product and "sku" in filters:
            return None
        return original(model, for_update=for_update, **filters)

    monkeypatch.setattr(store, "find_one_or_none", find_without_sku)

    with pytest.raises(DuplicateSku):
        create_product(store, name="Widget 2", sku="SKU-1", price=1, warehouse_id=warehouse_id, initial_quantity=7)

    db = session_local()
    try:
        assert int(db.execute(select(func.count(Product.id))).scalar_one()) == 1
        quantities = db.execute(select(Inventory.quantity)).scalars().all()
    finally:
        db.close()
    assert quantities == [5]
