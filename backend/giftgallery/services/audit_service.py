"""Audit logging service: records all state-changing operations.

Entries are immutable. The service provides a write-only interface for the
application and a purge used at startup.

Usage in service layer:
    audit_service.log(db, user_id="abc", action="folder_delete", resource_type="folder",
                      resource_id="f-123", details={"photos_removed": 2})
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import sqlalchemy.exc
from sqlalchemy.orm import Session

from ..models.user import AuditLog

logger = logging.getLogger(__name__)


def log(
    db: Session,
    user_id: Optional[str],
    action: str,
    resource_type: str,
    resource_id: Optional[str] = None,
    details: Optional[dict] = None,
    ip_address: Optional[str] = None,
) -> None:
    """Write an audit log entry. Never raises; failures are logged and the caller carries on."""
    try:
        entry = AuditLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            details=json.dumps(details) if details else None,
            ip_address=ip_address,
        )
        db.add(entry)
        db.commit()
    except sqlalchemy.exc.SQLAlchemyError as e:
        logger.warning("Failed to write audit log: %s", e)
        db.rollback()


def purge_old_entries(db: Session, days: int) -> int:
    """Delete audit entries older than *days*. Returns number removed."""
    cutoff = datetime.now(timezone.utc) - timedelta(days=days)
    count = db.query(AuditLog).filter(AuditLog.created_at < cutoff).delete()
    db.commit()
    return count
