"""
Audit entry model.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.core.database import Base


class AuditEntry(Base):
    """
    Audit log table model.

    Table: audit_entries
    Append-only record of administrative changes (imports, policy edits, etc.).
    """
    __tablename__ = "audit_entries"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    entity = Column(String(50), nullable=False, index=True)  # Product, Policy, Warehouse, Route
    action = Column(String(50), nullable=False)  # Created, Updated, Deleted, Imported
    actor = Column(String(255), nullable=False, index=True)
    details = Column(Text, nullable=False, default="")

    def __repr__(self):
        return f"<AuditEntry(id={self.id}, entity='{self.entity}', action='{self.action}')>"
