from typing import Optional, Union
from datetime import datetime
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, TimestampModel, timestamp_type
from app.models.enums import ReportStatus, enum_column


class ReportFields(SQLModel):
    reporter_id: str = Field(index=True)
    reason: str = 'other'
    description: Optional[str] = Field(default=None, sa_type=sa.Text())
    reviewed_at: Optional[datetime] = Field(default=None, sa_type=timestamp_type())
    reviewed_by: Optional[str] = None


class ListingReport(IDModel, TimestampModel, ReportFields, table=True):
    __tablename__ = 'listing_reports'

    listing_id: str = Field(index=True)
    status: ReportStatus = Field(
        default=ReportStatus.PENDING,
        sa_column=enum_column(ReportStatus, 'report_status'),
    )


class UserReport(IDModel, TimestampModel, ReportFields, table=True):
    __tablename__ = 'user_reports'

    reported_user_id: str = Field(index=True)
    status: ReportStatus = Field(
        default=ReportStatus.PENDING,
        sa_column=enum_column(ReportStatus, 'report_status'),
    )


Report = Union[ListingReport, UserReport]
