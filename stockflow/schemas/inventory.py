from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from stockflow.schemas.common import PaginationMeta


class StockAdjustIn(BaseModel):
    product_id: str = Field(validation_alias=AliasChoices("productId", "product_id"))
    warehouse_id: str = Field(validation_alias=AliasChoices("warehouseId", "warehouse_id"))
    delta: int = Field(..., description="Positive adds stock, negative removes stock. Cannot be zero.")
    reason: str = Field(..., description="One of: sale, restock, adjustment, damage.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "productId": "product-id-here",
                "warehouseId": "warehouse-id-here",
                "delta": -2,
                "reason": "damage",
            }
        }
    )


class StockLevelOut(BaseModel):
    product_id: str
    warehouse_id: str
    quantity: int


class InventoryLogEntryOut(BaseModel):
    id: int
    product_id: str
    warehouse_id: str
    old_quantity: int
    new_quantity: int
    change_reason: str
    created_at: datetime


class InventoryLogListOut(BaseModel):
    items: list[InventoryLogEntryOut]
    pagination: PaginationMeta
