from pydantic import BaseModel, ConfigDict, Field


class PaginationMeta(BaseModel):
    total: int
    limit: int
    offset: int
    count: int
    has_next: bool


class ValidationIssueOut(BaseModel):
    field: str
    message: str
    type: str | None = None


class ErrorDetailOut(BaseModel):
    code: str = Field(description="Stable machine-readable error code, e.g. duplicate_sku")
    message: str
    request_id: str
    path: str
    details: list[ValidationIssueOut] | None = None
    retryable: bool = Field(
        default=False,
        description="True when the same request may succeed if sent again (see Retry-After)",
    )


class ErrorOut(BaseModel):
    error: ErrorDetailOut

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "store_unavailable",
                    "message": "Storage is temporarily unavailable, retry the request",
                    "request_id": "8d8f2b00-6c79-4a45-8ff4-b0a5f2bc4bc2",
                    "path": "/api/companies/company-id/alerts/low-stock",
                    "details": None,
                    "retryable": True,
                }
            }
        }
    )
