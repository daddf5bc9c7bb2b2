"""
Database models for the application.
"""

from app.core.database import Base
from app.models.product import Product, ProductBarcode
from app.models.system_setting import SystemSetting
from app.models.audit import AuditEntry
from app.models.warehouse import Warehouse, Route

__all__ = [
    "Base",
    "Product",
    "ProductBarcode",
    "SystemSetting",
    "AuditEntry",
    "Warehouse",
    "Route",
]
