"""Report disposition: strikes, sanctions, content removal and follow-ups.

A decision is applied in a single transaction (strike, account sanction,
listing removal, report status and the decision record). Audit and
notification writes are returned as side effects for the caller to deliver
once the transaction has committed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from app.core.errors import AuthorizationError, InputValidationError, InternalError, NotFoundError
from app.core.policy import ModerationPolicy
from app.models.base import utc_now
from app.models.enums import ModerationAction, ReportStatus, ReportType
from app.models.moderation_decision import ModerationDecision
from app.schemas.moderation import (
    AccountActionRequest,
    RecommendationOut,
    TakeActionRequest,
    TakeActionResponse,
)
from app.services.audit_service import AuditEntry
from app.services.listing_service import remove_listing
from app.services.moderation_validation import validate_payload
from app.services.notification_service import (
    NotificationMessage,
    action_taken_notice,
    permanent_ban_notice,
    temp_suspension_notice,
    warning_notice,
)
from app.services.report_service import get_report, resolve_report, resolve_target
from app.services.severity_service import classify_reason, immediate_action_hint, recommend_action
from app.services.side_effects import AuditEffect, NotificationEffect, SideEffect
from app.services.strike_service import add_strike, get_strike_total
from app.services.user_service import apply_sanction, get_user, lift_ban, require_admin_account


@dataclass
class ActionOutcome:
    response: dict[str, Any]
    side_effects: list[SideEffect] = field(default_factory=list)
    replayed: bool = False


def _find_decision(session: Session, request: TakeActionRequest) -> Optional[ModerationDecision]:
    return session.exec(
        select(ModerationDecision).where(
            (ModerationDecision.report_type == request.report_type)
            & (ModerationDecision.report_id == request.report_id)
            & (ModerationDecision.action == request.action)
        )
    ).first()


def _replay(decision: ModerationDecision) -> ActionOutcome:
    logger.info(
        'moderation.action.replayed',
        report_id=decision.report_id,
        report_type=decision.report_type.value,
        action=decision.action.value,
    )
    return ActionOutcome(response=dict(decision.response), replayed=True)


def _target_notice(
    request: TakeActionRequest,
    target_user_id: str,
    listing_id: Optional[str],
    listing_title: Optional[str],
    suspension_until: Optional[datetime],
) -> Optional[NotificationMessage]:
    if request.action == ModerationAction.WARN:
        return warning_notice(target_user_id, listing_title, listing_id)
    if request.action == ModerationAction.TEMP_SUSPEND and suspension_until is not None:
        return temp_suspension_notice(target_user_id, suspension_until)
    if request.action == ModerationAction.BAN:
        return permanent_ban_notice(target_user_id)
    return None


def _commit_decision(session: Session, request: TakeActionRequest, decision: ModerationDecision) -> Optional[ActionOutcome]:
    """Commit the decision transaction.

    Returns a replay outcome when a concurrent request already committed the
    same decision key.
    """
    session.add(decision)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        existing = _find_decision(session, request)
        if existing is None:
            logger.exception('moderation.action.commit_failed', report_id=request.report_id)
            raise InternalError('Failed to apply moderation action') from exc
        return _replay(existing)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception('moderation.action.commit_failed', report_id=request.report_id)
        raise InternalError('Failed to apply moderation action') from exc
    return None


def take_action(
    session: Session,
    payload: Any,
    policy: ModerationPolicy,
    now: Optional[datetime] = None,
) -> ActionOutcome:
    request = validate_payload(TakeActionRequest, payload)
    decided_at = now or utc_now()

    try:
        require_admin_account(session, request.admin_id)

        existing = _find_decision(session, request)
        if existing is not None:
            return _replay(existing)

        report = get_report(session, request.report_type, request.report_id)
        if report is None:
            raise NotFoundError('Report not found')
        target = resolve_target(session, report)
        reporter_id = report.reporter_id

        if request.action == ModerationAction.DISMISS:
            resolve_report(
                session, request.report_type, request.report_id, ReportStatus.DISMISSED, request.admin_id, decided_at
            )
            response = TakeActionResponse(success=True, action=request.action).model_dump(
                mode='json', by_alias=True, exclude_unset=True
            )
            decision = ModerationDecision(
                report_id=request.report_id,
                report_type=request.report_type,
                action=request.action,
                admin_id=request.admin_id,
                target_user_id=target.user_id,
                response=response,
            )
            replay = _commit_decision(session, request, decision)
            if replay is not None:
                return replay
            logger.info(
                'moderation.action.applied',
                report_id=request.report_id,
                report_type=request.report_type.value,
                action=request.action.value,
            )
            return ActionOutcome(response=response)

        if not target.resolved:
            raise NotFoundError('Could not resolve the user to act on')
        target_user = get_user(session, target.user_id)
        if target_user is None:
            raise NotFoundError('Could not resolve the user to act on')
        target_user_id = target_user.id

        assessment = classify_reason(policy, report.reason)
        add_strike(
            session,
            target_user.id,
            assessment,
            request.action,
            report_id=request.report_id,
            report_type=request.report_type,
            admin_id=request.admin_id,
            notes=request.notes,
        )
        new_total = get_strike_total(session, target_user.id)

        suspension_until = apply_sanction(
            session,
            target_user,
            request.action,
            suspension_days=request.suspension_days,
            default_suspension_days=policy.default_suspension_days,
            now=decided_at,
        )

        if request.report_type == ReportType.LISTING and request.action != ModerationAction.WARN:
            remove_listing(session, report.listing_id)

        resolve_report(
            session, request.report_type, request.report_id, ReportStatus.RESOLVED, request.admin_id, decided_at
        )

        response = TakeActionResponse(
            success=True,
            action=request.action,
            severity=assessment.severity,
            new_strike_total=new_total,
            suspension_until=suspension_until,
        ).model_dump(mode='json', by_alias=True, exclude_unset=True)
        decision = ModerationDecision(
            report_id=request.report_id,
            report_type=request.report_type,
            action=request.action,
            admin_id=request.admin_id,
            target_user_id=target_user.id,
            response=response,
        )
        replay = _commit_decision(session, request, decision)
        if replay is not None:
            return replay
    except (InputValidationError, AuthorizationError, NotFoundError, InternalError):
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception('moderation.action.failed', report_id=request.report_id, action=request.action.value)
        raise InternalError('Failed to apply moderation action') from exc

    logger.info(
        'moderation.action.applied',
        report_id=request.report_id,
        report_type=request.report_type.value,
        action=request.action.value,
        target_user_id=target_user_id,
        severity=assessment.severity.value,
        new_strike_total=new_total,
    )

    audit = AuditEntry(
        admin_id=request.admin_id,
        action=f"report_action_{request.action.value}",
        target_id=target_user_id,
        details={
            'report_id': request.report_id,
            'report_type': request.report_type.value,
            'severity': assessment.severity.value,
            'strike_weight': assessment.strike_weight,
            'new_strike_total': new_total,
            'action': request.action.value,
            'suspension_until': suspension_until.isoformat() if suspension_until else None,
            'notes': request.notes,
        },
    )
    effects: list[SideEffect] = [
        AuditEffect(audit),
        NotificationEffect(action_taken_notice(reporter_id, request.report_id)),
    ]
    notice = _target_notice(request, target_user_id, target.listing_id, target.listing_title, suspension_until)
    if notice is not None:
        effects.append(NotificationEffect(notice))
    return ActionOutcome(response=response, side_effects=effects)


def recommend_for_report(
    session: Session,
    report_type: ReportType,
    report_id: str,
    policy: ModerationPolicy,
) -> RecommendationOut:
    report = get_report(session, report_type, report_id)
    if report is None:
        raise NotFoundError('Report not found')
    target = resolve_target(session, report)
    if not target.resolved:
        raise NotFoundError('Could not resolve the user to act on')
    assessment = classify_reason(policy, report.reason)
    current_total = get_strike_total(session, target.user_id)
    projected_total = current_total + assessment.strike_weight
    return RecommendationOut(
        report_id=report.id,
        report_type=report_type,
        target_user_id=target.user_id,
        reason=assessment.reason,
        severity=assessment.severity,
        strike_weight=assessment.strike_weight,
        current_total=current_total,
        projected_total=projected_total,
        recommended_action=recommend_action(policy, projected_total, assessment.severity),
        immediate_action=immediate_action_hint(policy, report.reason),
    )


def ban_user(session: Session, payload: Any) -> list[SideEffect]:
    request = validate_payload(AccountActionRequest, payload)
    require_admin_account(session, request.admin_id)
    user = get_user(session, request.user_id)
    if user is None:
        raise NotFoundError('User not found')
    if user.id == request.admin_id:
        raise AuthorizationError('Cannot ban yourself')
    if user.is_admin:
        raise AuthorizationError('Cannot ban admin users')
    if user.is_banned:
        raise InputValidationError('User is already banned')
    try:
        apply_sanction(session, user, ModerationAction.BAN)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception('moderation.user.ban_failed', user_id=request.user_id)
        raise InternalError('Failed to ban user') from exc
    logger.info('moderation.user.banned', user_id=user.id, admin_id=request.admin_id)
    return [AuditEffect(AuditEntry(admin_id=request.admin_id, action='ban_user', target_id=user.id))]


def unban_user(session: Session, payload: Any) -> list[SideEffect]:
    request = validate_payload(AccountActionRequest, payload)
    require_admin_account(session, request.admin_id)
    user = get_user(session, request.user_id)
    if user is None:
        raise NotFoundError('User not found')
    if not user.is_banned:
        raise InputValidationError('User is not banned')
    try:
        lift_ban(session, user)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception('moderation.user.unban_failed', user_id=request.user_id)
        raise InternalError('Failed to unban user') from exc
    logger.info('moderation.user.unbanned', user_id=user.id, admin_id=request.admin_id)
    return [AuditEffect(AuditEntry(admin_id=request.admin_id, action='unban_user', target_id=user.id))]
