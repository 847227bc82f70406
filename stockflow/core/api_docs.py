from stockflow.schemas.common import ErrorOut

# Every error code a route can answer with, grouped by HTTP status.
_ERROR_CODES: dict[int, list[tuple[str, str, bool]]] = {
    400: [
        ("invalid_input", "initial_quantity: cannot be negative", False),
        ("invalid_reason", "reason: must be one of: sale, restock, adjustment, damage", False),
    ],
    404: [("not_found", "Warehouse not found.", False)],
    409: [
        ("duplicate_sku", "A product with this SKU already exists.", False),
        ("insufficient_stock", "Insufficient stock: 3 on hand, change of -5 requested", False),
        ("concurrent_update", "Stock record was modified concurrently, retry the request", True),
    ],
    422: [("validation_error", "Validation failed", False)],
    500: [
        ("store_unavailable", "Storage is temporarily unavailable, retry the request", True),
        ("internal_error", "Internal server error", False),
    ],
}


def _envelope(code: str, message: str, retryable: bool) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "request_id": "request-id",
            "path": "/example",
            "details": None,
            "retryable": retryable,
        }
    }


def error_responses(*status_codes: int) -> dict[int, dict]:
    responses: dict[int, dict] = {}
    for status_code in status_codes:
        codes = _ERROR_CODES.get(status_code, [("http_error", "HTTP error", False)])
        responses[status_code] = {
            "model": ErrorOut,
            "description": " | ".join(code for code, _, _ in codes),
            "content": {
                "application/json": {
                    "examples": {
                        code: {"summary": message, "value": _envelope(code, message, retryable)}
                        for code, message, retryable in codes
                    }
                }
            },
        }
    return responses
