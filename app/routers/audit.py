"""
API Router for the audit log.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.audit_repository import AuditRepository
from app.schemas.audit import AuditEntryResponse, AuditListResponse

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("/", response_model=AuditListResponse)
def get_audit_entries(
    db: Session = Depends(get_db),
    entity: Optional[str] = Query(None, description="Filter by entity (Product, Policy, Warehouse, Route)"),
    actor: Optional[str] = Query(None, description="Filter by actor (partial match)"),
    on_date: Optional[date] = Query(None, alias="date", description="Filter by day (YYYY-MM-DD)"),
):
    """Get audit entries, newest first"""
    entries, total = AuditRepository.get_all(db, entity=entity, actor=actor, on_date=on_date)
    return AuditListResponse(
        items=[AuditEntryResponse.model_validate(e) for e in entries],
        total_count=total
    )
