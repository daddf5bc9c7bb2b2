"""
API Router for system settings and the stockholding policy.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.actor import get_current_actor
from app.core.database import get_db
from app.services.audit_repository import AuditRepository
from app.services.settings_repository import (
    SettingsRepository,
    StockholdingPolicyRepository,
    format_weeks,
)
from app.schemas.settings import StockholdingConfig, SystemSettingResponse

router = APIRouter(prefix="/settings", tags=["Settings & Policies"])


@router.get("/", response_model=List[SystemSettingResponse])
def get_all_settings(db: Session = Depends(get_db)):
    """Get every stored setting ordered by key"""
    return [SystemSettingResponse.model_validate(s) for s in SettingsRepository.get_all(db)]


@router.get("/stockholding", response_model=StockholdingConfig)
def get_stockholding_config(db: Session = Depends(get_db)):
    """
    Get the stockholding weeks policy.

    Missing keys fall back to default 8, minimum 1, maximum 52.
    """
    return StockholdingPolicyRepository.get_config(db)


@router.put("/stockholding", response_model=StockholdingConfig)
def update_stockholding_config(
    config: StockholdingConfig,
    db: Session = Depends(get_db),
    actor: str = Depends(get_current_actor),
):
    """
    Save the stockholding weeks policy.

    **Rules:** `0 < minWeeks < defaultWeeks < maxWeeks`. A policy that breaks
    a rule is rejected with 400 and none of the three values are changed.
    """
    saved = StockholdingPolicyRepository.update_config(db, config)
    AuditRepository.record(
        db,
        entity="Policy",
        action="Updated",
        actor=actor,
        details=(
            f"Stockholding weeks set to default {format_weeks(saved.default_weeks)}, "
            f"range {format_weeks(saved.min_weeks)}-{format_weeks(saved.max_weeks)}"
        ),
    )
    return saved
