from typing import Any, Optional
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, CreatedAtModel
from app.models.enums import ModerationAction, ReportType, enum_column


class ModerationDecision(IDModel, CreatedAtModel, SQLModel, table=True):
    """One row per applied (report, action) pair; replays repeated requests."""

    __tablename__ = 'moderation_decisions'
    __table_args__ = (sa.UniqueConstraint('report_type', 'report_id', 'action'),)

    report_id: str = Field(index=True)
    report_type: ReportType = Field(sa_column=enum_column(ReportType, 'decision_report_type'))
    action: ModerationAction = Field(sa_column=enum_column(ModerationAction, 'decision_action'))
    admin_id: str
    target_user_id: Optional[str] = None
    response: dict[str, Any] = Field(default_factory=dict, sa_column=sa.Column(sa.JSON(), nullable=False))
