"""
Warehouse and Route models.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Warehouse(Base):
    """Warehouse model - physical distribution sites"""
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    code = Column(String(20), nullable=False, unique=True, index=True)  # WH-A, WH-B, etc.
    name = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    routes = relationship("Route", back_populates="warehouse", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Warehouse(id={self.id}, code='{self.code}')>"


class Route(Base):
    """Delivery route served out of a warehouse"""
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    route_code = Column(String(20), nullable=False, unique=True, index=True)  # R-01, R-02, etc.
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    default_cage = Column(String(20), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    warehouse = relationship("Warehouse", back_populates="routes")

    def __repr__(self):
        return f"<Route(id={self.id}, route_code='{self.route_code}', warehouse_id={self.warehouse_id})>"
