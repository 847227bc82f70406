import json
from pathlib import Path

from stockflow.main import app


def test_openapi_paths_snapshot():
    snapshot_path = Path(__file__).parent / "snapshots" / "openapi_paths_snapshot.json"
    expected_paths = json.loads(snapshot_path.read_text(encoding="utf-8"))
    actual_paths = sorted(app.openapi()["paths"].keys())
    assert actual_paths == expected_paths


def test_create_product_documents_error_statuses():
    operation = app.openapi()["paths"]["/api/products"]["post"]
    assert {"201", "400", "404", "409", "500"} <= set(operation["responses"])
