from stockflow.core.id_utils import generate_shortuuid
from stockflow.core.observability import log_event
from stockflow.db.store import Store
from stockflow.models.company import Company
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse
from stockflow.services.validation import validate_named_entity


def create_company(store: Store, *, name: str | None) -> Company:
    clean_name = validate_named_entity(name)
    company = store.run_in_transaction(
        lambda tx: tx.insert(Company(id=generate_shortuuid(), name=clean_name))
    )
    log_event("company.created", company_id=company.id)
    return company


def create_warehouse(store: Store, *, company_id: str, name: str | None, address: str | None = None) -> Warehouse:
    clean_name = validate_named_entity(name)

    def _create(tx: Store) -> Warehouse:
        tx.find_one(Company, id=company_id, not_found="Company not found.")
        return tx.insert(
            Warehouse(id=generate_shortuuid(), company_id=company_id, name=clean_name, address=address)
        )

    warehouse = store.run_in_transaction(_create)
    log_event("warehouse.created", company_id=company_id, warehouse_id=warehouse.id)
    return warehouse


def create_supplier(
    store: Store,
    *,
    company_id: str,
    name: str | None,
    contact_email: str | None = None,
    contact_phone: str | None = None,
) -> Supplier:
    clean_name = validate_named_entity(name)

    def _create(tx: Store) -> Supplier:
        tx.find_one(Company, id=company_id, not_found="Company not found.")
        return tx.insert(
            Supplier(
                id=generate_shortuuid(),
                company_id=company_id,
                name=clean_name,
                contact_email=contact_email,
                contact_phone=contact_phone,
            )
        )

    supplier = store.run_in_transaction(_create)
    log_event("supplier.created", company_id=company_id, supplier_id=supplier.id)
    return supplier
