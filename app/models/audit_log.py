from typing import Any, Optional
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, CreatedAtModel


class AdminAuditLog(IDModel, CreatedAtModel, SQLModel, table=True):
    __tablename__ = 'admin_audit_log'

    admin_id: str = Field(index=True)
    action: str = Field(index=True)
    target_id: Optional[str] = Field(default=None, index=True)
    details: dict[str, Any] = Field(default_factory=dict, sa_column=sa.Column(sa.JSON(), nullable=False))
