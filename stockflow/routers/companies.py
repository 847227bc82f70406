from fastapi import APIRouter, Depends

from stockflow.core.api_docs import error_responses
from stockflow.core.deps import get_store
from stockflow.db.store import Store
from stockflow.schemas.company import (
    CompanyCreateIn,
    CompanyOut,
    SupplierCreateIn,
    SupplierOut,
    WarehouseCreateIn,
    WarehouseOut,
)
from stockflow.services.directory_service import create_company, create_supplier, create_warehouse

router = APIRouter(prefix="/api/companies", tags=["companies"])


@router.post(
    "",
    response_model=CompanyOut,
    status_code=201,
    summary="Register company",
    responses=error_responses(400, 422, 500),
)
def create_company_endpoint(
    payload: CompanyCreateIn,
    store: Store = Depends(get_store),
):
    company = create_company(store, name=payload.name)
    return CompanyOut(id=company.id, name=company.name, created_at=company.created_at)


@router.post(
    "/{company_id}/warehouses",
    response_model=WarehouseOut,
    status_code=201,
    summary="Register warehouse for a company",
    responses=error_responses(400, 404, 422, 500),
)
def create_warehouse_endpoint(
    company_id: str,
    payload: WarehouseCreateIn,
    store: Store = Depends(get_store),
):
    warehouse = create_warehouse(store, company_id=company_id, name=payload.name, address=payload.address)
    return WarehouseOut(
        id=warehouse.id,
        company_id=warehouse.company_id,
        name=warehouse.name,
        address=warehouse.address,
        created_at=warehouse.created_at,
    )


@router.post(
    "/{company_id}/suppliers",
    response_model=SupplierOut,
    status_code=201,
    summary="Register supplier for a company",
    responses=error_responses(400, 404, 422, 500),
)
def create_supplier_endpoint(
    company_id: str,
    payload: SupplierCreateIn,
    store: Store = Depends(get_store),
):
    supplier = create_supplier(
        store,
        company_id=company_id,
        name=payload.name,
        contact_email=payload.contact_email,
        contact_phone=payload.contact_phone,
    )
    return SupplierOut(
        id=supplier.id,
        company_id=supplier.company_id,
        name=supplier.name,
        contact_email=supplier.contact_email,
        contact_phone=supplier.contact_phone,
        created_at=supplier.created_at,
    )
