"""
Repository layer for Warehouse and Route operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.models.warehouse import Warehouse, Route
from app.schemas.warehouse import WarehouseCreate, WarehouseUpdate, RouteCreate


class WarehouseRepository:
    """Repository for Warehouse operations"""

    @staticmethod
    def create(db: Session, warehouse: WarehouseCreate) -> Warehouse:
        """Create a new warehouse"""
        existing = db.query(Warehouse).filter(Warehouse.code == warehouse.code).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Warehouse with code {warehouse.code} already exists"
            )

        db_warehouse = Warehouse(**warehouse.model_dump())
        db.add(db_warehouse)
        db.commit()
        db.refresh(db_warehouse)
        return db_warehouse

    @staticmethod
    def get_by_id(db: Session, warehouse_id: int) -> Optional[Warehouse]:
        """Get warehouse by ID"""
        return db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()

    @staticmethod
    def get_all(db: Session) -> List[Warehouse]:
        """Get all warehouses ordered by code"""
        return db.query(Warehouse).order_by(Warehouse.code.asc()).all()

    @staticmethod
    def update(db: Session, warehouse_id: int, warehouse_update: WarehouseUpdate) -> Optional[Warehouse]:
        """Update a warehouse"""
        db_warehouse = WarehouseRepository.get_by_id(db, warehouse_id)
        if not db_warehouse:
            return None

        update_data = warehouse_update.model_dump(exclude_unset=True)
        new_code = update_data.get("code")
        if new_code and new_code != db_warehouse.code:
            clash = db.query(Warehouse).filter(Warehouse.code == new_code).first()
            if clash:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Warehouse with code {new_code} already exists"
                )

        for field, value in update_data.items():
            if value is not None:
                setattr(db_warehouse, field, value)

        db.commit()
        db.refresh(db_warehouse)
        return db_warehouse

    @staticmethod
    def delete(db: Session, warehouse_id: int) -> bool:
        """Delete a warehouse (cascades to its routes)"""
        db_warehouse = WarehouseRepository.get_by_id(db, warehouse_id)
        if not db_warehouse:
            return False

        db.delete(db_warehouse)
        db.commit()
        return True


class RouteRepository:
    """Repository for Route operations"""

    @staticmethod
    def create(db: Session, route: RouteCreate) -> Route:
        """Create a new route on an existing warehouse"""
        if not WarehouseRepository.get_by_id(db, route.warehouse_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Warehouse with ID {route.warehouse_id} not found"
            )

        existing = db.query(Route).filter(Route.route_code == route.route_code).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Route with code {route.route_code} already exists"
            )

        db_route = Route(**route.model_dump())
        db.add(db_route)
        db.commit()
        db.refresh(db_route)
        return db_route

    @staticmethod
    def get_by_id(db: Session, route_id: int) -> Optional[Route]:
        """Get route by ID"""
        return db.query(Route).filter(Route.id == route_id).first()

    @staticmethod
    def get_all(db: Session, warehouse_id: Optional[int] = None) -> List[Route]:
        """Get all routes, optionally for one warehouse"""
        query = db.query(Route)
        if warehouse_id is not None:
            query = query.filter(Route.warehouse_id == warehouse_id)
        return query.order_by(Route.route_code.asc()).all()

    @staticmethod
    def delete(db: Session, route_id: int) -> bool:
        """Delete a route"""
        db_route = RouteRepository.get_by_id(db, route_id)
        if not db_route:
            return False

        db.delete(db_route)
        db.commit()
        return True
