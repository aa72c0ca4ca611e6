from dataclasses import dataclass, field
from typing import Any, Optional
from sqlmodel import Session
from app.models.audit_log import AdminAuditLog


@dataclass(frozen=True)
class AuditEntry:
    admin_id: str
    action: str
    target_id: Optional[str]
    details: dict[str, Any] = field(default_factory=dict)


def create_audit_entry(session: Session, entry: AuditEntry) -> AdminAuditLog:
    record = AdminAuditLog(
        admin_id=entry.admin_id,
        action=entry.action,
        target_id=entry.target_id,
        details=dict(entry.details),
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    return record
