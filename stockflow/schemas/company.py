from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _strip_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


class CompanyCreateIn(BaseModel):
    name: Optional[str] = None

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Test Company Inc."}})


class CompanyOut(BaseModel):
    id: str
    name: str
    created_at: datetime | None = None


class WarehouseCreateIn(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None

    @field_validator("address")
    @classmethod
    def normalize_address(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Main Warehouse",
                "address": "123 Inventory Street, Business City",
            }
        }
    )


class WarehouseOut(BaseModel):
    id: str
    company_id: str
    name: str
    address: Optional[str] = None
    created_at: datetime | None = None


class SupplierCreateIn(BaseModel):
    name: Optional[str] = None
    contact_email: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("contactEmail", "contact_email")
    )
    contact_phone: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("contactPhone", "contact_phone")
    )

    @field_validator("contact_email", "contact_phone")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Widgets R Us",
                "contactEmail": "orders@widgetsrus.com",
                "contactPhone": "+1-555-0123",
            }
        }
    )


class SupplierOut(BaseModel):
    id: str
    company_id: str
    name: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    created_at: datetime | None = None
