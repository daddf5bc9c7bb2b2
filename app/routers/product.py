"""
API Router for Product catalog endpoints.
Browse, edit and delete products created by catalog imports.
"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.actor import get_current_actor
from app.core.database import get_db
from app.services.audit_repository import AuditRepository
from app.services.product_repository import ProductRepository, ProductBarcodeRepository
from app.services.settings_repository import StockholdingPolicyRepository, stockholding_note
from app.schemas.product import (
    ProductUpdate,
    ProductResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductBarcodeResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/products", tags=["Products"])


def _product_not_found(product_id) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product with ID {product_id} not found"
    )


# ============================================================================
# READ ENDPOINTS
# ============================================================================

@router.get("/", response_model=ProductListResponse)
def get_all_products(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Search alias, name or brand"),
    category: Optional[str] = Query(None, description="Filter by category"),
):
    """Get the product catalog ordered by product name."""
    products, total = ProductRepository.get_all(db, search=search, category=category)
    return ProductListResponse(
        items=[ProductResponse.model_validate(p) for p in products],
        total_count=total
    )


@router.get("/by-alias/{product_alias}", response_model=ProductResponse)
def get_product_by_alias(product_alias: str, db: Session = Depends(get_db)):
    """Get a product by its alias"""
    product = ProductRepository.get_by_alias(db, product_alias)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with alias {product_alias} not found"
        )
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductDetailResponse)
def get_product(product_id: UUID, db: Session = Depends(get_db)):
    """
    Get a product with its barcodes.

    `stockholding_note` compares the product's weeks to the current policy:
    `default`, `low` (may cause stockouts), `high` (may increase holding
    costs) or null.
    """
    product = ProductRepository.get_with_barcodes(db, product_id)
    if not product:
        raise _product_not_found(product_id)

    config = StockholdingPolicyRepository.get_config(db)
    detail = ProductDetailResponse.model_validate(product)
    return detail.model_copy(update={"stockholding_note": stockholding_note(product.stockholding_weeks, config)})


@router.get("/{product_id}/barcodes", response_model=List[ProductBarcodeResponse])
def get_product_barcodes(product_id: UUID, db: Session = Depends(get_db)):
    """Get the CASE and UNIT barcodes of a product"""
    if not ProductRepository.get_by_id(db, product_id):
        raise _product_not_found(product_id)
    barcodes = ProductBarcodeRepository.get_by_product_id(db, product_id)
    return [ProductBarcodeResponse.model_validate(b) for b in barcodes]


# ============================================================================
# UPDATE & DELETE ENDPOINTS
# ============================================================================

@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    product_update: ProductUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """
    Update a product.

    `stockholding_weeks` must lie within the stockholding policy's minimum
    and maximum; otherwise the request is rejected with 400 and the product
    is left unchanged.
    """
    config = StockholdingPolicyRepository.get_config(db)
    try:
        product = ProductRepository.update(db, product_id, product_update, config)
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update product"
        )
    if not product:
        raise _product_not_found(product_id)

    AuditRepository.record(db, "Product", "Updated", actor, f"Updated product {product.product_alias}")
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=SuccessResponse)
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """Delete a product and its barcodes"""
    product = ProductRepository.get_by_id(db, product_id)
    if not product:
        raise _product_not_found(product_id)
    product_alias = product.product_alias

    ProductRepository.delete(db, product_id)
    AuditRepository.record(db, "Product", "Deleted", actor, f"Deleted product {product_alias}")
    return SuccessResponse(message=f"Product {product_alias} deleted successfully")
