def test_company_warehouse_and_supplier_registration(test_context):
    client, _ = test_context

    company = client.post("/api/companies", json={"name": "  Test Company Inc. "})
    assert company.status_code == 201, company.text
    company_id = company.json()["id"]
    assert company.json()["name"] == "Test Company Inc."

    warehouse = client.post(
        f"/api/companies/{company_id}/warehouses",
        json={"name": "Main Warehouse", "address": "123 Industrial Way"},
    )
    assert warehouse.status_code == 201, warehouse.text
    assert warehouse.json()["company_id"] == company_id
    assert warehouse.json()["address"] == "123 Industrial Way"

    supplier = client.post(
        f"/api/companies/{company_id}/suppliers",
        json={"name": "Widgets R Us", "contact_email": "orders@widgetsrus.com", "contactPhone": "555-0100"},
    )
    assert supplier.status_code == 201, supplier.text
    body = supplier.json()
    assert body["contact_email"] == "orders@widgetsrus.com"
    assert body["contact_phone"] == "555-0100"


def test_unknown_company_is_not_found(test_context):
    client, _ = test_context

    for path in ("warehouses", "suppliers"):
        res = client.post(f"/api/companies/missing/{path}", json={"name": "X"})
        assert res.status_code == 404, res.text
        assert res.json()["error"]["message"] == "Company not found."


def test_blank_names_are_rejected(test_context):
    client, _ = test_context

    res = client.post("/api/companies", json={"name": "   "})
    assert res.status_code == 400, res.text
    assert res.json()["error"]["details"][0]["field"] == "name"

    company_id = client.post("/api/companies", json={"name": "Co"}).json()["id"]
    res = client.post(f"/api/companies/{company_id}/warehouses", json={})
    assert res.status_code == 400, res.text


def test_health_endpoints(test_context):
    client, _ = test_context

    assert client.get("/health").json() == {"ok": True}
    ready = client.get("/ready")
    assert ready.status_code == 200, ready.text
    assert ready.json() == {"ok": True}
