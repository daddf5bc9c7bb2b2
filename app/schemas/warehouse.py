"""
Pydantic schemas for Warehouse and Route.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


# ============================================================================
# Warehouse Schemas
# ============================================================================

class WarehouseBase(BaseModel):
    """Base schema for Warehouse"""
    code: str = Field(..., min_length=1, max_length=20, description="Warehouse code (e.g., WH-A)")
    name: str = Field(..., min_length=1, max_length=255)
    city: str = Field(default="", max_length=100)


class WarehouseCreate(WarehouseBase):
    """Schema for creating a new warehouse"""
    pass


class WarehouseUpdate(BaseModel):
    """Schema for updating a warehouse"""
    code: Optional[str] = Field(None, min_length=1, max_length=20)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, max_length=100)


class WarehouseResponse(WarehouseBase):
    """Schema for warehouse response"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Route Schemas
# ============================================================================

class RouteBase(BaseModel):
    """Base schema for Route"""
    route_code: str = Field(..., min_length=1, max_length=20, description="Route code (e.g., R-01)")
    warehouse_id: int = Field(..., description="Warehouse this route departs from")
    default_cage: str = Field(default="", max_length=20, description="Default cage (e.g., C-101)")


class RouteCreate(RouteBase):
    """Schema for creating a new route"""
    pass


class RouteResponse(RouteBase):
    """Schema for route response"""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class RouteListResponse(BaseModel):
    items: List[RouteResponse]
    total_count: int
