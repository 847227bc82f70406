from pydantic import BaseModel, ConfigDict


class AlertSupplierOut(BaseModel):
    id: str
    name: str
    contact_email: str | None = None


class LowStockAlertOut(BaseModel):
    product_id: str
    product_name: str
    sku: str
    warehouse_id: str
    warehouse_name: str
    current_stock: int
    threshold: int
    supplier: AlertSupplierOut | None = None


class LowStockAlertListOut(BaseModel):
    alerts: list[LowStockAlertOut]
    total_alerts: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "alerts": [
                    {
                        "product_id": "product-id",
                        "product_name": "Premium Widget",
                        "sku": "WIDGET-001",
                        "warehouse_id": "warehouse-id",
                        "warehouse_name": "Main Warehouse",
                        "current_stock": 10,
                        "threshold": 25,
                        "supplier": {
                            "id": "supplier-id",
                            "name": "Widgets R Us",
                            "contact_email": "orders@widgetsrus.com",
                        },
                    }
                ],
                "total_alerts": 1,
            }
        }
    )
