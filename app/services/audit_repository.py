"""
Repository for the audit trail.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from app.models.audit import AuditEntry


class AuditRepository:
    """Repository for AuditEntry operations"""

    @staticmethod
    def record(db: Session, entity: str, action: str, actor: str, details: str) -> AuditEntry:
        """Append an audit entry"""
        db_entry = AuditEntry(entity=entity, action=action, actor=actor, details=details)
        db.add(db_entry)
        db.commit()
        db.refresh(db_entry)
        return db_entry

    @staticmethod
    def get_all(
        db: Session,
        entity: Optional[str] = None,
        actor: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> Tuple[List[AuditEntry], int]:
        """
        Get audit entries, newest first.

        Filters:
        - entity: exact entity name (Product, Policy, Warehouse, Route)
        - actor: partial, case-insensitive match
        - on_date: entries logged on that calendar day
        """
        query = db.query(AuditEntry)

        if entity:
            query = query.filter(AuditEntry.entity == entity)
        if actor:
            query = query.filter(AuditEntry.actor.ilike(f"%{actor}%"))
        if on_date:
            start = datetime.combine(on_date, time.min)
            query = query.filter(
                AuditEntry.timestamp >= start,
                AuditEntry.timestamp < start + timedelta(days=1),
            )

        entries = query.order_by(AuditEntry.timestamp.desc(), AuditEntry.id.desc()).all()
        return entries, len(entries)
