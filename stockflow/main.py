from sqlalchemy import text

from stockflow.core.errors import StockflowError
from stockflow.core.observability import (
    http_exception_handler,
    request_logging_middleware,
    setup_observability,
    stockflow_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from stockflow.core.config import settings
from stockflow.db.session import engine
from stockflow.routers import alerts, companies, inventory, products

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description=(
        "Inventory tracking across company warehouses with low-stock alerts.\n\n"
        "Swagger quick test flow:\n"
        "1. `POST /api/companies`, then register a warehouse and a supplier under it.\n"
        "2. `POST /api/products` with the warehouse id and an initial quantity.\n"
        "3. `POST /api/inventory/adjust` to record sales, restocks or damage.\n"
        "4. `GET /api/companies/{company_id}/alerts/low-stock`."
    ),
    swagger_ui_parameters={
        "displayRequestDuration": True,
        "defaultModelsExpandDepth": 1,
    },
    openapi_tags=[
        {"name": "health", "description": "Service status and quick links."},
        {"name": "companies", "description": "Companies and the warehouses and suppliers they own."},
        {"name": "products", "description": "Product catalog with atomic initial stock."},
        {"name": "inventory", "description": "Stock changes, stock levels and change history."},
        {"name": "alerts", "description": "Low-stock alerts per company."},
    ],
)

setup_observability()
app.middleware("http")(request_logging_middleware)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(StockflowError, stockflow_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

cors_origins = settings.cors_origins or ["http://localhost:3000"]
allow_all_origins = "*" in cors_origins
env_value = settings.env.lower().strip()
allow_origin_regex = settings.cors_origin_regex

if (
    not allow_origin_regex
    and env_value in {"dev", "development", "staging", "stage"}
):
    # Local tooling runs on dynamic localhost ports.
    allow_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all_origins else cors_origins,
    allow_origin_regex=allow_origin_regex,
    allow_credentials=not allow_all_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(companies.router)
app.include_router(products.router)
app.include_router(inventory.router)
app.include_router(alerts.router)


@app.get("/", tags=["health"])
def root():
    return {
        "app": settings.app_name,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/health",
        "ready": "/ready",
    }


@app.get("/health", tags=["health"])
def health():
    return {"ok": True}


@app.get("/ready", tags=["health"])
def ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        return {"ok": False}
    return {"ok": True}
