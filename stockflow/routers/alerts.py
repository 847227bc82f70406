from fastapi import APIRouter, Depends

from stockflow.core.api_docs import error_responses
from stockflow.core.deps import get_store
from stockflow.db.store import Store
from stockflow.schemas.alert import AlertSupplierOut, LowStockAlertListOut, LowStockAlertOut
from stockflow.services.alert_service import list_low_stock_alerts

router = APIRouter(prefix="/api/companies", tags=["alerts"])


@router.get(
    "/{company_id}/alerts/low-stock",
    response_model=LowStockAlertListOut,
    summary="List low-stock alerts across a company's warehouses",
    responses=error_responses(500),
)
def list_low_stock_alerts_endpoint(
    company_id: str,
    store: Store = Depends(get_store),
):
    alerts = [
        LowStockAlertOut(
            product_id=alert.product_id,
            product_name=alert.product_name,
            sku=alert.sku,
            warehouse_id=alert.warehouse_id,
            warehouse_name=alert.warehouse_name,
            current_stock=alert.current_stock,
            threshold=alert.threshold,
            supplier=(
                AlertSupplierOut(
                    id=alert.supplier.id,
                    name=alert.supplier.name,
                    contact_email=alert.supplier.contact_email,
                )
                if alert.supplier
                else None
            ),
        )
        for alert in list_low_stock_alerts(store, company_id)
    ]
    return LowStockAlertListOut(alerts=alerts, total_alerts=len(alerts))
