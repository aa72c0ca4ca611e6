from typing import Optional
from sqlalchemy import func
from sqlmodel import Session, col, select
from app.models.enums import ModerationAction, ReportType
from app.models.strike import UserStrike
from app.services.severity_service import SeverityAssessment


def add_strike(
    session: Session,
    user_id: str,
    assessment: SeverityAssessment,
    action: ModerationAction,
    *,
    report_id: Optional[str] = None,
    report_type: Optional[ReportType] = None,
    admin_id: Optional[str] = None,
    notes: Optional[str] = None,
) -> UserStrike:
    record = UserStrike(
        user_id=user_id,
        report_id=report_id,
        report_type=report_type,
        severity=assessment.severity,
        strike_weight=assessment.strike_weight,
        action_taken=action,
        admin_id=admin_id,
        notes=notes,
    )
    session.add(record)
    session.flush()
    return record


def get_strike_total(session: Session, user_id: str) -> int:
    statement = select(func.coalesce(func.sum(UserStrike.strike_weight), 0)).where(UserStrike.user_id == user_id)
    result = session.exec(statement).one()
    return int(result or 0)


def list_strikes(
    session: Session,
    user_id: str,
    limit: Optional[int] = 50,
    offset: int = 0,
) -> list[UserStrike]:
    statement = (
        select(UserStrike)
        .where(UserStrike.user_id == user_id)
        .order_by(col(UserStrike.created_at).desc())
    )
    if offset:
        statement = statement.offset(offset)
    if limit is not None:
        statement = statement.limit(limit)
    return list(session.exec(statement).all())


def strike_totals(session: Session, user_ids: list[str]) -> dict[str, int]:
    if not user_ids:
        return {}
    statement = (
        select(UserStrike.user_id, func.sum(UserStrike.strike_weight))
        .where(col(UserStrike.user_id).in_(user_ids))
        .group_by(UserStrike.user_id)
    )
    totals = {user_id: 0 for user_id in user_ids}
    for user_id, total in session.exec(statement).all():
        totals[user_id] = int(total or 0)
    return totals
