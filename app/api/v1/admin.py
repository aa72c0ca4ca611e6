from typing import Callable, NoReturn, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from sqlmodel import Session

from app.core.config import settings
from app.core.errors import InputValidationError, ModerationError, NotFoundError
from app.core.policy import ModerationPolicy, get_moderation_policy
from app.db.session import get_session
from app.models.enums import ReportType
from app.schemas.moderation import (
    AccountActionRequest,
    RecommendationOut,
    SeverityCatalogEntry,
    StrikeHistoryOut,
    StrikeOut,
    StrikeTotalsOut,
    StrikeTotalsRequest,
    TakeActionRequest,
)
from app.services.moderation_service import ban_user, recommend_for_report, take_action, unban_user
from app.services.moderation_validation import describe_errors, require_uuid
from app.services.severity_service import severity_catalog
from app.services.side_effects import deliver_side_effects
from app.services.strike_service import get_strike_total, list_strikes, strike_totals
from app.services.user_service import get_user, require_admin_account


class AdminRoute(APIRoute):
    """Reports malformed admin requests as 400 instead of FastAPI's 422."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def _handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as exc:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=describe_errors(exc.errors()),
                ) from exc

        return _handler


router = APIRouter(prefix='/admin', tags=['admin'], route_class=AdminRoute)


def _raise_http(exc: ModerationError) -> NoReturn:
    raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


def _parse_report_type(value: str) -> ReportType:
    try:
        return ReportType(value)
    except ValueError as exc:
        raise InputValidationError('reportType must be "listing" or "user"') from exc


@router.post('/reports/take-action')
def take_action_endpoint(
    payload: TakeActionRequest,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    policy: ModerationPolicy = Depends(get_moderation_policy),
) -> dict:
    try:
        outcome = take_action(session, payload, policy)
    except ModerationError as exc:
        _raise_http(exc)
    if outcome.side_effects:
        background_tasks.add_task(deliver_side_effects, outcome.side_effects)
    return outcome.response


@router.post('/users/ban')
def ban_user_endpoint(
    payload: AccountActionRequest,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
) -> dict:
    try:
        effects = ban_user(session, payload)
    except ModerationError as exc:
        _raise_http(exc)
    background_tasks.add_task(deliver_side_effects, effects)
    return {'success': True}


@router.post('/users/unban')
def unban_user_endpoint(
    payload: AccountActionRequest,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
) -> dict:
    try:
        effects = unban_user(session, payload)
    except ModerationError as exc:
        _raise_http(exc)
    background_tasks.add_task(deliver_side_effects, effects)
    return {'success': True}


@router.post('/user-strikes', response_model=StrikeTotalsOut)
def strike_totals_endpoint(
    payload: StrikeTotalsRequest,
    session: Session = Depends(get_session),
) -> StrikeTotalsOut:
    try:
        require_admin_account(session, payload.admin_id)
    except ModerationError as exc:
        _raise_http(exc)
    user_ids = list(dict.fromkeys(payload.user_ids))[: settings.STRIKE_TOTALS_MAX_USERS]
    return StrikeTotalsOut(totals=strike_totals(session, user_ids))


@router.get('/users/{user_id}/strikes', response_model=StrikeHistoryOut)
def strike_history_endpoint(
    user_id: str,
    admin_id: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    session: Session = Depends(get_session),
) -> StrikeHistoryOut:
    try:
        require_uuid(admin_id, 'admin ID')
        require_uuid(user_id, 'user ID')
        require_admin_account(session, admin_id)
        if get_user(session, user_id) is None:
            raise NotFoundError('User not found')
    except ModerationError as exc:
        _raise_http(exc)
    strikes = list_strikes(session, user_id, limit=limit, offset=offset)
    return StrikeHistoryOut(
        user_id=user_id,
        total=get_strike_total(session, user_id),
        strikes=[
            StrikeOut(
                id=record.id,
                report_id=record.report_id,
                report_type=record.report_type,
                severity=record.severity,
                strike_weight=record.strike_weight,
                action_taken=record.action_taken,
                admin_id=record.admin_id,
                notes=record.notes,
                created_at=record.created_at,
            )
            for record in strikes
        ],
    )


@router.get('/reports/{report_type}/{report_id}/recommendation', response_model=RecommendationOut)
def recommendation_endpoint(
    report_type: str,
    report_id: str,
    admin_id: Optional[str] = None,
    session: Session = Depends(get_session),
    policy: ModerationPolicy = Depends(get_moderation_policy),
) -> RecommendationOut:
    try:
        require_uuid(admin_id, 'admin ID')
        require_uuid(report_id, 'report ID')
        report_kind = _parse_report_type(report_type)
        require_admin_account(session, admin_id)
        return recommend_for_report(session, report_kind, report_id, policy)
    except ModerationError as exc:
        _raise_http(exc)


@router.get('/severity-catalog', response_model=list[SeverityCatalogEntry])
def severity_catalog_endpoint(
    policy: ModerationPolicy = Depends(get_moderation_policy),
) -> list[SeverityCatalogEntry]:
    return severity_catalog(policy)
