"""
Schemas for the application.

This module exports all Pydantic models and schemas used for request/response validation.
"""

from app.schemas.product import (
    # Normalized import records
    NormalizedProduct,
    NormalizedBarcode,
    # Product schemas
    ProductUpdate,
    ProductResponse,
    ProductBarcodeResponse,
    ProductDetailResponse,
    ProductListResponse,
    # Utility schemas
    SuccessResponse,
)

from app.schemas.catalog_import import (
    REQUIRED_COLUMNS,
    OPTIONAL_COLUMNS,
    ValidationIssue,
    ImportRowsRequest,
    ValidationResponse,
    ImportPreviewResponse,
    NormalizationResponse,
    ImportSubmitResponse,
    ImportTemplateResponse,
)

from app.schemas.settings import (
    StockholdingConfig,
    SystemSettingResponse,
)

from app.schemas.warehouse import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehouseResponse,
    RouteCreate,
    RouteResponse,
    RouteListResponse,
)

from app.schemas.audit import (
    AuditEntryResponse,
    AuditListResponse,
)

__all__ = [
    # Normalized import records
    "NormalizedProduct",
    "NormalizedBarcode",

    # Product schemas
    "ProductUpdate",
    "ProductResponse",
    "ProductBarcodeResponse",
    "ProductDetailResponse",
    "ProductListResponse",
    "SuccessResponse",

    # Catalog import schemas
    "REQUIRED_COLUMNS",
    "OPTIONAL_COLUMNS",
    "ValidationIssue",
    "ImportRowsRequest",
    "ValidationResponse",
    "ImportPreviewResponse",
    "NormalizationResponse",
    "ImportSubmitResponse",
    "ImportTemplateResponse",

    # Settings schemas
    "StockholdingConfig",
    "SystemSettingResponse",

    # Warehouse & route schemas
    "WarehouseCreate",
    "WarehouseUpdate",
    "WarehouseResponse",
    "RouteCreate",
    "RouteResponse",
    "RouteListResponse",

    # Audit schemas
    "AuditEntryResponse",
    "AuditListResponse",
]
