"""
Pydantic schemas for Product and ProductBarcode.
Request and response models for catalog endpoints.
"""

from datetime import datetime
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, Field


BarcodeKind = Literal["CASE", "UNIT"]


# ============================================================================
# Normalized import records
# ============================================================================

class NormalizedProduct(BaseModel):
    """Canonical product master produced from one import row"""
    product_alias: str = Field(..., description="Business-unique product code (e.g., NB-APPLE)")
    principal_company: str = ""
    product_name: str = ""
    brand: str = ""
    case_size: str = ""
    pack_size: str = ""
    category: str = ""
    pack_count: int = Field(default=0, ge=0)
    container: str = ""
    stockholding_weeks: float = Field(..., allow_inf_nan=False, description="Target weeks of inventory cover")


class NormalizedBarcode(BaseModel):
    """Barcode keyed by the owning product's alias"""
    sku: str = Field(..., description="Product alias of the owning product")
    barcode: str
    kind: BarcodeKind


# ============================================================================
# Product Schemas
# ============================================================================

class ProductUpdate(BaseModel):
    """Schema for editing a single product"""
    product_name: Optional[str] = Field(None, max_length=255)
    brand: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    case_size: Optional[str] = Field(None, max_length=100)
    pack_size: Optional[str] = Field(None, max_length=100)
    pack_count: Optional[int] = Field(None, ge=0)
    container: Optional[str] = Field(None, max_length=100)
    stockholding_weeks: Optional[float] = Field(
        None, allow_inf_nan=False, description="Must fall within the stockholding policy bounds"
    )


class ProductResponse(NormalizedProduct):
    """Schema for product response"""
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductBarcodeResponse(BaseModel):
    """Schema for product barcode response"""
    id: UUID
    product_id: UUID
    barcode: str
    kind: BarcodeKind
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductDetailResponse(ProductResponse):
    """Product with its barcodes and a stockholding advisory"""
    barcodes: List[ProductBarcodeResponse] = []
    stockholding_note: Optional[Literal["default", "low", "high"]] = Field(
        None, description="How the product's stockholding weeks compare to the policy"
    )


class ProductListResponse(BaseModel):
    """Schema for the product catalog listing"""
    items: List[ProductResponse]
    total_count: int


# ============================================================================
# Success/Error Response Schemas
# ============================================================================

class SuccessResponse(BaseModel):
    """Generic success response"""
    success: bool = True
    message: str
    data: Optional[dict] = None
