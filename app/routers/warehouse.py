"""
API Router for Warehouse and Route endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.actor import get_current_actor
from app.core.database import get_db
from app.services.audit_repository import AuditRepository
from app.services.warehouse_repository import WarehouseRepository, RouteRepository
from app.schemas.warehouse import (
    WarehouseCreate, WarehouseUpdate, WarehouseResponse,
    RouteCreate, RouteResponse, RouteListResponse,
)
from app.schemas.product import SuccessResponse

router = APIRouter(prefix="/warehouses", tags=["Warehouses & Routes"])


# ============================================================================
# ROUTE ENDPOINTS
# ============================================================================

@router.get("/routes/", response_model=RouteListResponse)
def get_all_routes(
    db: Session = Depends(get_db),
    warehouse_id: Optional[int] = Query(None, description="Filter by warehouse"),
):
    """Get all routes ordered by route code"""
    routes = RouteRepository.get_all(db, warehouse_id)
    return RouteListResponse(
        items=[RouteResponse.model_validate(r) for r in routes],
        total_count=len(routes)
    )


@router.post("/routes/", response_model=RouteResponse, status_code=status.HTTP_201_CREATED)
def create_route(
    route: RouteCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """Create a route on an existing warehouse"""
    db_route = RouteRepository.create(db, route)
    AuditRepository.record(
        db, "Route", "Created", actor,
        f"Created route {db_route.route_code} for warehouse {db_route.warehouse.code}"
    )
    return RouteResponse.model_validate(db_route)


@router.delete("/routes/{route_id}", response_model=SuccessResponse)
def delete_route(
    route_id: int,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """Delete a route"""
    route = RouteRepository.get_by_id(db, route_id)
    if not route:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Route with ID {route_id} not found"
        )
    route_code = route.route_code

    RouteRepository.delete(db, route_id)
    AuditRepository.record(db, "Route", "Deleted", actor, f"Deleted route {route_code}")
    return SuccessResponse(message=f"Route {route_code} deleted successfully")


# ============================================================================
# WAREHOUSE ENDPOINTS
# ============================================================================

@router.get("/", response_model=List[WarehouseResponse])
def get_all_warehouses(db: Session = Depends(get_db)):
    """Get all warehouses ordered by code"""
    return [WarehouseResponse.model_validate(w) for w in WarehouseRepository.get_all(db)]


@router.post("/", response_model=WarehouseResponse, status_code=status.HTTP_201_CREATED)
def create_warehouse(
    warehouse: WarehouseCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """Create a new warehouse"""
    db_warehouse = WarehouseRepository.create(db, warehouse)
    AuditRepository.record(db, "Warehouse", "Created", actor, f"Created warehouse {db_warehouse.code}")
    return WarehouseResponse.model_validate(db_warehouse)


@router.get("/{warehouse_id}", response_model=WarehouseResponse)
def get_warehouse(warehouse_id: int, db: Session = Depends(get_db)):
    """Get a warehouse by ID"""
    warehouse = WarehouseRepository.get_by_id(db, warehouse_id)
    if not warehouse:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Warehouse with ID {warehouse_id} not found"
        )
    return WarehouseResponse.model_validate(warehouse)


@router.put("/{warehouse_id}", response_model=WarehouseResponse)
def update_warehouse(
    warehouse_id: int,
    warehouse_update: WarehouseUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """Update a warehouse"""
    warehouse = WarehouseRepository.update(db, warehouse_id, warehouse_update)
    if not warehouse:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Warehouse with ID {warehouse_id} not found"
        )
    AuditRepository.record(db, "Warehouse", "Updated", actor, f"Updated warehouse {warehouse.code} configuration")
    return WarehouseResponse.model_validate(warehouse)


@router.delete("/{warehouse_id}", response_model=SuccessResponse)
def delete_warehouse(
    warehouse_id: int,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """Delete a warehouse and its routes"""
    warehouse = WarehouseRepository.get_by_id(db, warehouse_id)
    if not warehouse:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Warehouse with ID {warehouse_id} not found"
        )
    code = warehouse.code

    WarehouseRepository.delete(db, warehouse_id)
    AuditRepository.record(db, "Warehouse", "Deleted", actor, f"Deleted warehouse {code}")
    return SuccessResponse(message=f"Warehouse {code} deleted successfully")
