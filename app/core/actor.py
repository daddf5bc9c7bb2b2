"""
Request actor identification for the audit trail.

The console does not authenticate requests; callers may name themselves with
an X-Actor header, which is recorded verbatim on audit entries.
"""

from typing import Optional
from fastapi import Header

from app.core.config import settings


def get_current_actor(x_actor: Optional[str] = Header(None, description="Operator recorded on audit entries")) -> str:
    """Return the X-Actor header, or the configured default actor"""
    if x_actor and x_actor.strip():
        return x_actor.strip()
    return settings.DEFAULT_AUDIT_ACTOR
