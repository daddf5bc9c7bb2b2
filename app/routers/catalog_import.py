"""
API Router for the catalog import pipeline.
Upload, validate, normalize, export and submit product master files.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status, File, UploadFile
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.actor import get_current_actor
from app.core.config import settings
from app.core.database import get_db
from app.services.audit_repository import AuditRepository
from app.services.catalog_file_reader import is_supported_file, read_catalog_file
from app.services.csv_export import to_csv
from app.services.import_normalizer import normalize_products, normalize_barcodes
from app.services.import_validator import has_blocking_issues, validate_product_import
from app.services.product_repository import CatalogRepository
from app.services.settings_repository import StockholdingPolicyRepository
from app.schemas.catalog_import import (
    REQUIRED_COLUMNS,
    OPTIONAL_COLUMNS,
    ImportRowsRequest,
    ValidationResponse,
    ImportPreviewResponse,
    NormalizationResponse,
    ImportSubmitResponse,
    ImportTemplateResponse,
)
from app.schemas.product import ProductResponse, ProductBarcodeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog-imports", tags=["Catalog Imports"])


def _validation_summary(issues) -> dict:
    error_count = sum(1 for issue in issues if issue.type == "error")
    return {
        "issues": issues,
        "error_count": error_count,
        "warning_count": len(issues) - error_count,
        "can_submit": error_count == 0,
    }


def _csv_download(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ============================================================================
# TEMPLATE
# ============================================================================

@router.get("/template", response_model=ImportTemplateResponse)
def get_import_template():
    """List the column headers the importer expects."""
    return ImportTemplateResponse(
        required_columns=REQUIRED_COLUMNS,
        optional_columns=OPTIONAL_COLUMNS,
    )


# ============================================================================
# UPLOAD & VALIDATION
# ============================================================================

@router.post("/preview", response_model=ImportPreviewResponse)
async def preview_import(
    file: UploadFile = File(..., description="Product master .xlsx or .csv"),
    db: Session = Depends(get_db),
):
    """
    Parse an uploaded product master and validate its rows.

    **Required columns:** see `GET /catalog-imports/template`.

    A file that cannot be parsed is logged and reported as an empty import
    (no rows, no issues) rather than as a failure.
    """
    if not file.filename or not is_supported_file(file.filename):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File must be an .xlsx or .csv file"
        )

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size exceeds {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit"
        )

    try:
        rows = read_catalog_file(file.filename, content)
    except Exception as e:
        logger.error(f"Error parsing file {file.filename}: {str(e)}", exc_info=True)
        rows = []

    if len(rows) > settings.MAX_IMPORT_ROWS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File contains {len(rows)} rows. Maximum allowed is {settings.MAX_IMPORT_ROWS:,} rows."
        )

    config = StockholdingPolicyRepository.get_config(db)
    issues = validate_product_import(rows, config)

    return ImportPreviewResponse(
        filename=file.filename,
        total_rows=len(rows),
        rows=rows,
        **_validation_summary(issues),
    )


@router.post("/validate", response_model=ValidationResponse)
def validate_import(request: ImportRowsRequest, db: Session = Depends(get_db)):
    """Validate rows without persisting anything."""
    config = StockholdingPolicyRepository.get_config(db)
    issues = validate_product_import(request.rows, config)
    return ValidationResponse(**_validation_summary(issues))


@router.post("/normalize", response_model=NormalizationResponse)
def normalize_import(request: ImportRowsRequest, db: Session = Depends(get_db)):
    """Preview the product and barcode records a submission would write."""
    config = StockholdingPolicyRepository.get_config(db)
    return NormalizationResponse(
        products=normalize_products(request.rows, config),
        barcodes=normalize_barcodes(request.rows),
    )


# ============================================================================
# EXPORT
# ============================================================================

@router.post("/export/products.csv")
def export_products_csv(request: ImportRowsRequest, db: Session = Depends(get_db)):
    """Download the normalized products as products.csv."""
    config = StockholdingPolicyRepository.get_config(db)
    return _csv_download(to_csv(normalize_products(request.rows, config)), "products.csv")


@router.post("/export/product_barcodes.csv")
def export_barcodes_csv(request: ImportRowsRequest):
    """Download the normalized barcodes as product_barcodes.csv."""
    return _csv_download(to_csv(normalize_barcodes(request.rows)), "product_barcodes.csv")


# ============================================================================
# SUBMIT
# ============================================================================

@router.post("/submit", response_model=ImportSubmitResponse)
def submit_import(
    request: ImportRowsRequest,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """
    Validate, normalize and reconcile rows into the catalog.

    **Workflow:**
    1. Reject the batch (422) if validation reports any error
    2. Upsert products by alias
    3. Replace the barcodes of every upserted product

    Warnings never block a submission. On a store failure nothing is
    written and the same rows can be submitted again.
    """
    config = StockholdingPolicyRepository.get_config(db)
    issues = validate_product_import(request.rows, config)
    summary = _validation_summary(issues)

    if has_blocking_issues(issues):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": f"{summary['error_count']} errors must be fixed before submitting",
                "issues": [issue.model_dump() for issue in issues],
            }
        )

    products = normalize_products(request.rows, config)
    barcodes = normalize_barcodes(request.rows)

    try:
        db_products, db_barcodes = CatalogRepository.upsert_products_with_barcodes(db, products, barcodes)
        response = ImportSubmitResponse(
            products_upserted=len(db_products),
            barcodes_inserted=len(db_barcodes),
            warning_count=summary["warning_count"],
            products=[ProductResponse.model_validate(p) for p in db_products],
            barcodes=[ProductBarcodeResponse.model_validate(b) for b in db_barcodes],
        )
        source = f" from {request.filename}" if request.filename else ""
        AuditRepository.record(
            db,
            entity="Product",
            action="Imported",
            actor=actor,
            details=f"Imported {len(db_products)} products{source}",
        )
    except SQLAlchemyError as e:
        logger.error(f"Catalog import failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit catalog import"
        )

    return response
