"""
Field checks run before any write is attempted.

Everything here is pure: no session, no clock. Each check raises
``ValidationError`` for the first violated field so callers can fail fast.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from stockflow.core.errors import InsufficientStock, InvalidReason, ValidationError
from stockflow.core.money import parse_money
from stockflow.models.inventory import CHANGE_REASONS

# Column limits: Integer is int32 on PostgreSQL, price is Numeric(12, 2).
MAX_QUANTITY = 2_147_483_647
MAX_PRICE = Decimal("9999999999.99")
NAME_MAX_LENGTH = 255
SKU_MAX_LENGTH = 100


@dataclass(frozen=True)
class ProductDraft:
    name: str
    sku: str
    price: Decimal
    warehouse_id: str
    initial_quantity: int
    supplier_id: str | None = None
    low_stock_threshold: int = 0
    is_bundle: bool = False
    bundle_components: list[dict[str, Any]] = field(default_factory=list)


def _required_text(field_name: str, value: Any, *, max_length: int | None = None) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(field_name, "is required")
    cleaned = value.strip()
    if max_length is not None and len(cleaned) > max_length:
        raise ValidationError(field_name, f"must be at most {max_length} characters")
    return cleaned


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _non_negative_int(field_name: str, value: Any, *, required: bool) -> int | None:
    if value is None:
        if required:
            raise ValidationError(field_name, "is required")
        return None
    if not _is_int(value):
        raise ValidationError(field_name, "must be an integer")
    if value < 0:
        raise ValidationError(field_name, "cannot be negative")
    if value > MAX_QUANTITY:
        raise ValidationError(field_name, f"cannot exceed {MAX_QUANTITY}")
    return value


def _component_value(component: Any, key: str) -> Any:
    if isinstance(component, Mapping):
        return component.get(key)
    return getattr(component, key, None)


def _bundle_components(is_bundle: bool, components: Iterable[Any] | None) -> list[dict[str, Any]]:
    items = list(components or [])
    if items and not is_bundle:
        raise ValidationError("bundle_components", "only allowed when is_bundle is true")

    normalized: list[dict[str, Any]] = []
    seen: set[str] = set()
    for index, component in enumerate(items):
        component_id = _component_value(component, "component_id")
        if not isinstance(component_id, str) or not component_id.strip():
            raise ValidationError(f"bundle_components.{index}.component_id", "is required")
        component_id = component_id.strip()
        if component_id in seen:
            raise ValidationError(f"bundle_components.{index}.component_id", "is listed more than once")
        quantity = _component_value(component, "quantity")
        if not _is_int(quantity) or not 1 <= quantity <= MAX_QUANTITY:
            raise ValidationError(f"bundle_components.{index}.quantity", f"must be an integer between 1 and {MAX_QUANTITY}")
        seen.add(component_id)
        normalized.append({"component_id": component_id, "quantity": quantity})
    return normalized


def validate_product_create(
    *,
    name: Any,
    sku: Any,
    price: Any,
    warehouse_id: Any,
    initial_quantity: Any,
    supplier_id: Any = None,
    low_stock_threshold: Any = None,
    is_bundle: bool = False,
    bundle_components: Iterable[Any] | None = None,
) -> ProductDraft:
    clean_name = _required_text("name", name, max_length=NAME_MAX_LENGTH)
    clean_sku = _required_text("sku", sku, max_length=SKU_MAX_LENGTH)

    if price is None:
        raise ValidationError("price", "is required")
    amount = parse_money(price)
    if amount is None:
        raise ValidationError("price", "must be a number")
    if amount < 0:
        raise ValidationError("price", "cannot be negative")
    if amount > MAX_PRICE:
        raise ValidationError("price", f"cannot exceed {MAX_PRICE}")

    clean_warehouse_id = _required_text("warehouse_id", warehouse_id)
    quantity = _non_negative_int("initial_quantity", initial_quantity, required=True)

    clean_supplier_id = None
    if supplier_id is not None:
        clean_supplier_id = _required_text("supplier_id", supplier_id)
    threshold = _non_negative_int("low_stock_threshold", low_stock_threshold, required=False)

    return ProductDraft(
        name=clean_name,
        sku=clean_sku,
        price=amount,
        warehouse_id=clean_warehouse_id,
        initial_quantity=quantity,
        supplier_id=clean_supplier_id,
        low_stock_threshold=threshold or 0,
        is_bundle=bool(is_bundle),
        bundle_components=_bundle_components(bool(is_bundle), bundle_components),
    )


def validate_stock_change(reason: Any, delta: Any) -> str:
    if reason not in CHANGE_REASONS:
        raise InvalidReason(reason, CHANGE_REASONS)
    if not _is_int(delta):
        raise ValidationError("delta", "must be an integer")
    if delta == 0:
        raise ValidationError("delta", "cannot be zero")
    if abs(delta) > MAX_QUANTITY:
        raise ValidationError("delta", f"cannot exceed {MAX_QUANTITY} in either direction")
    return reason


def ensure_non_negative(current: int, delta: int) -> int:
    new_quantity = current + delta
    if new_quantity < 0:
        raise InsufficientStock(current=current, delta=delta)
    if new_quantity > MAX_QUANTITY:
        raise ValidationError("delta", f"would raise stock above {MAX_QUANTITY}")
    return new_quantity


def validate_named_entity(name: Any) -> str:
    return _required_text("name", name, max_length=NAME_MAX_LENGTH)
