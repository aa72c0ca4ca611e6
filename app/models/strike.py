from typing import Optional
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, CreatedAtModel
from app.models.enums import ModerationAction, ReportType, Severity, enum_column


class UserStrike(IDModel, CreatedAtModel, SQLModel, table=True):
    __tablename__ = 'user_strikes'

    user_id: str = Field(index=True)
    report_id: Optional[str] = Field(default=None, index=True)
    report_type: Optional[ReportType] = Field(
        default=None,
        sa_column=enum_column(ReportType, 'strike_report_type', nullable=True),
    )
    severity: Severity = Field(sa_column=enum_column(Severity, 'strike_severity'))
    strike_weight: int
    action_taken: ModerationAction = Field(sa_column=enum_column(ModerationAction, 'moderation_action'))
    admin_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text()))
