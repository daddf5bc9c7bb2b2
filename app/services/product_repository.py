"""
Repository layer for Product and ProductBarcode operations.
Handles catalog queries, single-product edits and the import reconciliation
that upserts products and replaces their barcodes.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from fastapi import HTTPException, status

from app.models.product import Product, ProductBarcode
from app.schemas.product import NormalizedProduct, NormalizedBarcode, ProductUpdate
from app.schemas.settings import StockholdingConfig
from app.services.settings_repository import check_stockholding_weeks

logger = logging.getLogger(__name__)


class ProductRepository:
    """Repository for Product operations"""

    @staticmethod
    def get_all(
        db: Session,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Tuple[List[Product], int]:
        """Get all products ordered by name, with optional filters"""
        query = db.query(Product)

        if category:
            query = query.filter(Product.category == category)
        if search:
            query = query.filter(
                or_(
                    Product.product_alias.ilike(f"%{search}%"),
                    Product.product_name.ilike(f"%{search}%"),
                    Product.brand.ilike(f"%{search}%"),
                )
            )

        products = query.order_by(Product.product_name.asc()).all()
        return products, len(products)

    @staticmethod
    def get_by_id(db: Session, product_id: UUID) -> Optional[Product]:
        """Get product by ID"""
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def get_with_barcodes(db: Session, product_id: UUID) -> Optional[Product]:
        """Get product by ID with its barcodes loaded"""
        return db.query(Product).options(
            selectinload(Product.barcodes)
        ).filter(Product.id == product_id).first()

    @staticmethod
    def get_by_alias(db: Session, product_alias: str) -> Optional[Product]:
        """Get product by alias"""
        return db.query(Product).filter(Product.product_alias == product_alias).first()

    @staticmethod
    def update(
        db: Session,
        product_id: UUID,
        product_update: ProductUpdate,
        config: StockholdingConfig,
    ) -> Optional[Product]:
        """
        Update a product.

        Stockholding weeks outside the policy bounds are rejected before
        anything is written.
        """
        db_product = ProductRepository.get_by_id(db, product_id)
        if not db_product:
            return None

        update_data = product_update.model_dump(exclude_unset=True)
        weeks = update_data.get("stockholding_weeks")
        if weeks is not None:
            message = check_stockholding_weeks(weeks, config)
            if message:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)

        try:
            for field, value in update_data.items():
                if value is not None:
                    setattr(db_product, field, value)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.error(f"Failed to update product {product_id}", exc_info=True)
            raise

        db.refresh(db_product)
        return db_product

    @staticmethod
    def delete(db: Session, product_id: UUID) -> bool:
        """Delete a product together with its barcodes"""
        db_product = ProductRepository.get_by_id(db, product_id)
        if not db_product:
            return False

        db.delete(db_product)
        db.commit()
        return True


class ProductBarcodeRepository:
    """Repository for ProductBarcode operations"""

    @staticmethod
    def get_by_product_id(db: Session, product_id: UUID) -> List[ProductBarcode]:
        """Get all barcodes of a product"""
        return db.query(ProductBarcode).filter(
            ProductBarcode.product_id == product_id
        ).order_by(ProductBarcode.kind.asc()).all()

    @staticmethod
    def delete_by_product_ids(db: Session, product_ids: List[UUID]) -> int:
        """Delete every barcode owned by the given products (no commit)"""
        if not product_ids:
            return 0
        return db.query(ProductBarcode).filter(
            ProductBarcode.product_id.in_(product_ids)
        ).delete(synchronize_session=False)


class CatalogRepository:
    """Reconciles normalized import records with the stored catalog"""

    @staticmethod
    def upsert_products(db: Session, products: List[NormalizedProduct]) -> List[Product]:
        """
        Insert or overwrite products keyed by product_alias (no commit).

        Every field is overwritten and updated_at is refreshed. When the same
        alias appears more than once the last row wins. Returns one product
        per distinct alias, in first-seen order, with IDs assigned.
        """
        aliases = list({p.product_alias for p in products})
        existing: Dict[str, Product] = {}
        if aliases:
            for db_product in db.query(Product).filter(Product.product_alias.in_(aliases)).all():
                existing[db_product.product_alias] = db_product

        now = datetime.now(timezone.utc)
        upserted: Dict[str, Product] = {}
        for product in products:
            data = product.model_dump()
            db_product = upserted.get(product.product_alias) or existing.get(product.product_alias)
            if db_product is None:
                db_product = Product(**data)
                db.add(db_product)
            else:
                for field, value in data.items():
                    setattr(db_product, field, value)
            db_product.updated_at = now
            upserted[product.product_alias] = db_product

        db.flush()
        return list(upserted.values())

    @staticmethod
    def upsert_products_with_barcodes(
        db: Session,
        products: List[NormalizedProduct],
        barcodes: List[NormalizedBarcode],
    ) -> Tuple[List[Product], List[ProductBarcode]]:
        """
        Upsert products and fully replace their barcodes.

        Workflow:
        1. Upsert products by alias
        2. Map alias -> stored product ID
        3. Resolve each barcode's owner, dropping barcodes with no product
        4. Delete all existing barcodes of the upserted products
        5. Insert the resolved barcodes

        Steps 1-5 run in one transaction; any store error rolls the whole
        import back and is re-raised.
        """
        try:
            db_products = CatalogRepository.upsert_products(db, products)
            product_ids = {p.product_alias: p.id for p in db_products}

            db_barcodes = []
            for barcode in barcodes:
                product_id = product_ids.get(barcode.sku)
                if product_id is None:
                    logger.warning(f"Dropping {barcode.kind} barcode {barcode.barcode}: no product '{barcode.sku}'")
                    continue
                db_barcodes.append(ProductBarcode(
                    product_id=product_id,
                    barcode=barcode.barcode,
                    kind=barcode.kind,
                ))

            removed = ProductBarcodeRepository.delete_by_product_ids(db, list(product_ids.values()))
            db.add_all(db_barcodes)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.error("Catalog import rolled back", exc_info=True)
            raise

        logger.info(
            f"Catalog import: {len(db_products)} products upserted, "
            f"{removed} barcodes replaced by {len(db_barcodes)}"
        )
        return db_products, db_barcodes
