"""
Pydantic schemas for system settings and the stockholding policy.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class StockholdingConfig(BaseModel):
    """Default and bounds for product stockholding weeks"""
    default_weeks: float = Field(8, alias="defaultWeeks", allow_inf_nan=False)
    min_weeks: float = Field(1, alias="minWeeks", allow_inf_nan=False)
    max_weeks: float = Field(52, alias="maxWeeks", allow_inf_nan=False)

    class Config:
        populate_by_name = True


class SystemSettingResponse(BaseModel):
    """Schema for a single key/value setting"""
    id: int
    setting_key: str
    setting_value: str
    description: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
