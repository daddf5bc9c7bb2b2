"""
Pydantic schemas for audit log entries.
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel


class AuditEntryResponse(BaseModel):
    """Schema for audit entry response"""
    id: int
    timestamp: datetime
    entity: str
    action: str
    actor: str
    details: str

    class Config:
        from_attributes = True


class AuditListResponse(BaseModel):
    items: List[AuditEntryResponse]
    total_count: int
