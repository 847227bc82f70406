"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``stockflow.core.observability.stockflow_error_handler``
renders them with the standard error envelope. ``code`` is the stable,
machine-readable part of every error response.
"""


class StockflowError(Exception):
    status_code = 500
    code = "internal_error"
    retryable = False

    def __init__(self, message: str | None = None, *, details: list[dict] | None = None):
        self.message = message or "Internal server error"
        self.details = details
        super().__init__(self.message)


class InvalidInput(StockflowError):
    status_code = 400
    code = "invalid_input"

    def __init__(self, message: str = "Invalid input", *, details: list[dict] | None = None):
        super().__init__(message, details=details)


class ValidationError(InvalidInput):
    """First violated field constraint of a request."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            f"{field}: {reason}",
            details=[{"field": field, "message": reason, "type": "invariant"}],
        )


class InvalidReason(ValidationError):
    code = "invalid_reason"

    def __init__(self, reason_value: object, allowed: tuple[str, ...]):
        self.value = reason_value
        super().__init__("reason", f"must be one of: {', '.join(allowed)}")


class NotFound(StockflowError):
    status_code = 404
    code = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class Conflict(StockflowError):
    status_code = 409
    code = "conflict"

    def __init__(self, message: str = "Conflict"):
        super().__init__(message)


class DuplicateSku(Conflict):
    code = "duplicate_sku"

    def __init__(self, sku: str):
        self.sku = sku
        super().__init__("A product with this SKU already exists.")


class ConcurrentUpdate(Conflict):
    code = "concurrent_update"
    retryable = True

    def __init__(self, message: str = "Stock record was modified concurrently, retry the request"):
        super().__init__(message)


class InsufficientStock(StockflowError):
    status_code = 409
    code = "insufficient_stock"

    def __init__(self, *, current: int, delta: int):
        self.current = current
        self.delta = delta
        super().__init__(f"Insufficient stock: {current} on hand, change of {delta} requested")


class StoreUnavailable(StockflowError):
    status_code = 500
    code = "store_unavailable"
    retryable = True

    def __init__(self, message: str = "Storage is temporarily unavailable, retry the request"):
        super().__init__(message)


class UniqueConstraintViolation(StockflowError):
    """Raised by the store; services translate it before it reaches a caller."""

    status_code = 409
    code = "conflict"

    def __init__(self, message: str = "Unique constraint violated"):
        super().__init__(message)
