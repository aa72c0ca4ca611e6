from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from app.models.enums import ModerationAction, ReportType, Severity

UUID_PATTERN = r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$'

UUIDStr = Annotated[str, StringConstraints(pattern=UUID_PATTERN)]

MAX_SUSPENSION_DAYS = 36500


class TakeActionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    report_id: UUIDStr = Field(alias='reportId')
    report_type: ReportType = Field(alias='reportType')
    admin_id: UUIDStr = Field(alias='adminId')
    action: ModerationAction
    suspension_days: Optional[int] = Field(default=None, alias='suspensionDays', le=MAX_SUSPENSION_DAYS)
    notes: Optional[str] = None


class TakeActionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    action: ModerationAction
    severity: Optional[Severity] = None
    new_strike_total: Optional[int] = Field(default=None, alias='newStrikeTotal')
    suspension_until: Optional[datetime] = Field(default=None, alias='suspensionUntil')


class AccountActionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    user_id: UUIDStr = Field(alias='userId')
    admin_id: UUIDStr = Field(alias='adminId')


class StrikeTotalsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    admin_id: UUIDStr = Field(alias='adminId')
    user_ids: list[UUIDStr] = Field(default_factory=list, alias='userIds')


class StrikeTotalsOut(BaseModel):
    totals: dict[str, int]


class StrikeOut(BaseModel):
    id: str
    report_id: Optional[str]
    report_type: Optional[ReportType]
    severity: Severity
    strike_weight: int
    action_taken: ModerationAction
    admin_id: Optional[str]
    notes: Optional[str]
    created_at: datetime


class StrikeHistoryOut(BaseModel):
    user_id: str
    total: int
    strikes: list[StrikeOut]


class RecommendationOut(BaseModel):
    report_id: str
    report_type: ReportType
    target_user_id: str
    reason: str
    severity: Severity
    strike_weight: int
    current_total: int
    projected_total: int
    recommended_action: ModerationAction
    immediate_action: str


class SeverityCatalogEntry(BaseModel):
    reason: str
    severity: Severity
    strike_weight: int
    immediate_action: str
    description: str
