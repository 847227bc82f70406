import os
import sys
import uuid

import requests

base_url = os.getenv("STOCKFLOW_BASE_URL", "http://localhost:8000").rstrip("/")


def _post(path: str, payload: dict) -> dict:
    response = requests.post(f"{base_url}{path}", json=payload, timeout=15)
    response.raise_for_status()
    return response.json()


def main() -> int:
    company = _post("/api/companies", {"name": "Smoke Test Co"})
    warehouse = _post(f"/api/companies/{company['id']}/warehouses", {"name": "Smoke Warehouse"})
    created = _post(
        "/api/products",
        {
            "name": "Smoke Widget",
            "sku": f"SMOKE-{uuid.uuid4().hex[:8]}",
            "price": 1.5,
            "warehouseId": warehouse["id"],
            "initialQuantity": 3,
            "lowStockThreshold": 5,
        },
    )

    alerts_response = requests.get(
        f"{base_url}/api/companies/{company['id']}/alerts/low-stock",
        timeout=15,
    )
    alerts_response.raise_for_status()

    alerts = alerts_response.json()
    print(f"Product: {created['product_id']}")
    print(f"Low-stock alerts: {alerts['total_alerts']}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except requests.RequestException as exc:
        print(f"StockFlow API probe failed: {exc}", file=sys.stderr)
        raise SystemExit(1)
