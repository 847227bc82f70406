from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Body fields are untyped. stockflow.services.validation checks them and
# reports a 400 naming the first missing, mistyped or out-of-range field.


class BundleComponentIn(BaseModel):
    component_id: Any = Field(
        default=None, validation_alias=AliasChoices("componentId", "component_id")
    )
    quantity: Any = None


class ProductCreateIn(BaseModel):
    name: Any = None
    sku: Any = None
    price: Any = None
    warehouse_id: Any = Field(
        default=None, validation_alias=AliasChoices("warehouseId", "warehouse_id")
    )
    initial_quantity: Any = Field(
        default=None, validation_alias=AliasChoices("initialQuantity", "initial_quantity")
    )
    supplier_id: Any = Field(
        default=None, validation_alias=AliasChoices("supplierId", "supplier_id")
    )
    low_stock_threshold: Any = Field(
        default=None, validation_alias=AliasChoices("lowStockThreshold", "low_stock_threshold")
    )
    is_bundle: bool = Field(default=False, validation_alias=AliasChoices("isBundle", "is_bundle"))
    bundle_components: Optional[list[BundleComponentIn]] = Field(
        default=None, validation_alias=AliasChoices("bundleComponents", "bundle_components")
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Premium Widget",
                "sku": "WIDGET-001",
                "price": 29.99,
                "warehouseId": "warehouse-id-here",
                "initialQuantity": 40,
                "supplierId": "supplier-id-here",
                "lowStockThreshold": 25,
            }
        }
    )


class ProductCreateOut(BaseModel):
    message: str
    product_id: str


class BundleComponentOut(BaseModel):
    component_id: str
    quantity: int


class ProductInventoryOut(BaseModel):
    warehouse_id: str
    quantity: int
    updated_at: datetime | None = None


class ProductOut(BaseModel):
    id: str
    name: str
    sku: str
    price: float
    supplier_id: Optional[str] = None
    low_stock_threshold: int
    is_bundle: bool
    bundle_components: list[BundleComponentOut] = Field(default_factory=list)
    inventory: list[ProductInventoryOut] = Field(default_factory=list)
    created_at: datetime | None = None
