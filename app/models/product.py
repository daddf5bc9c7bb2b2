"""
Product and ProductBarcode models.
Database models for the product catalog populated by catalog imports.
"""

import uuid
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Product(Base):
    """Product master - one row per product alias"""
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_alias = Column(String(100), nullable=False, unique=True, index=True)  # Business key (e.g., NB-APPLE)
    principal_company = Column(String(255), nullable=False, default="")
    product_name = Column(String(255), nullable=False, default="", index=True)
    brand = Column(String(255), nullable=False, default="")
    case_size = Column(String(100), nullable=False, default="")
    pack_size = Column(String(100), nullable=False, default="")
    category = Column(String(100), nullable=False, default="", index=True)
    pack_count = Column(Integer, nullable=False, default=0)
    container = Column(String(100), nullable=False, default="")
    stockholding_weeks = Column(Float, nullable=False, default=8)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    barcodes = relationship(
        "ProductBarcode",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Product(id={self.id}, alias='{self.product_alias}')>"


class ProductBarcode(Base):
    """Case or unit barcode belonging to a product"""
    __tablename__ = "product_barcodes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    barcode = Column(String(64), nullable=False, index=True)
    kind = Column(String(10), nullable=False)  # CASE or UNIT
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    product = relationship("Product", back_populates="barcodes")

    def __repr__(self):
        return f"<ProductBarcode(product_id={self.product_id}, kind='{self.kind}', barcode='{self.barcode}')>"
