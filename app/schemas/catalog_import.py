"""
Pydantic schemas for the catalog import pipeline.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from app.schemas.product import (
    NormalizedProduct,
    NormalizedBarcode,
    ProductResponse,
    ProductBarcodeResponse,
)


# Header names of the product master template (case and space sensitive)
REQUIRED_COLUMNS: List[str] = [
    "Product Alias",
    "PrincipalCompany",
    "Product Name",
    "Brand",
    "Case Size",
    "Pack size",
    "Category",
    "Pack Count",
    "Container",
    "Case barcode",
    "Unit Barcode",
]

STOCKHOLDING_COLUMN = "Stockholding Weeks"

OPTIONAL_COLUMNS: List[str] = [STOCKHOLDING_COLUMN]

# One raw spreadsheet row keyed by column header
ImportRow = Dict[str, Any]


class ValidationIssue(BaseModel):
    """A single problem found in an import row"""
    row: int = Field(..., description="Spreadsheet line number (header is line 1)")
    field: str
    message: str
    type: Literal["error", "warning"]


class ImportRowsRequest(BaseModel):
    """Raw rows sent back by the client for validation or submission"""
    rows: List[ImportRow] = Field(..., description="Rows keyed by template column name")
    filename: Optional[str] = Field(None, description="Name of the uploaded file, for the audit trail")


class ValidationResponse(BaseModel):
    """Validation outcome for a batch of rows"""
    issues: List[ValidationIssue]
    error_count: int
    warning_count: int
    can_submit: bool


class ImportPreviewResponse(ValidationResponse):
    """Parsed upload together with its validation outcome"""
    filename: str
    total_rows: int
    rows: List[ImportRow]


class NormalizationResponse(BaseModel):
    """Normalized records derived from a batch of rows"""
    products: List[NormalizedProduct]
    barcodes: List[NormalizedBarcode]


class ImportSubmitResponse(BaseModel):
    """Result of reconciling an import into the catalog"""
    success: bool = True
    products_upserted: int
    barcodes_inserted: int
    warning_count: int = 0
    products: List[ProductResponse]
    barcodes: List[ProductBarcodeResponse]


class ImportTemplateResponse(BaseModel):
    """Column layout expected by the importer"""
    required_columns: List[str]
    optional_columns: List[str]
