"""
API routers for the application.
"""

from fastapi import APIRouter
from app.routers import catalog_import, product, settings, warehouse, audit

api_router = APIRouter()

# Include routers
api_router.include_router(catalog_import.router)  # Product master import pipeline
api_router.include_router(product.router)  # Product catalog
api_router.include_router(settings.router)  # Settings & stockholding policy
api_router.include_router(warehouse.router)  # Warehouses & routes
api_router.include_router(audit.router)  # Audit log

__all__ = ["api_router", "catalog_import", "product", "settings", "warehouse", "audit"]
