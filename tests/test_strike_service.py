from datetime import timedelta

from app.core.policy import get_moderation_policy
from app.models.base import utc_now
from app.models.enums import ModerationAction, ReportType, Severity
from app.models.strike import UserStrike
from app.services.severity_service import classify_reason
from app.services.strike_service import add_strike, get_strike_total, list_strikes, strike_totals
from tests.factories import make_user


def test_strike_total_sums_weights(session):
    user = make_user(session)
    policy = get_moderation_policy()
    assert get_strike_total(session, user.id) == 0

    add_strike(session, user.id, classify_reason(policy, 'spam'), ModerationAction.WARN)
    add_strike(session, user.id, classify_reason(policy, 'scam'), ModerationAction.BAN, report_type=ReportType.LISTING)
    session.commit()

    assert get_strike_total(session, user.id) == 4


def test_strike_total_includes_uncommitted_insert(session):
    user = make_user(session)
    add_strike(session, user.id, classify_reason(get_moderation_policy(), 'harassment'), ModerationAction.WARN)
    assert get_strike_total(session, user.id) == 2
    session.rollback()
    assert get_strike_total(session, user.id) == 0


def test_strike_totals_reports_every_requested_user(session):
    first = make_user(session)
    second = make_user(session)
    policy = get_moderation_policy()
    add_strike(session, first.id, classify_reason(policy, 'fake'), ModerationAction.WARN)
    add_strike(session, first.id, classify_reason(policy, 'other'), ModerationAction.WARN)
    session.commit()

    assert strike_totals(session, [first.id, second.id]) == {first.id: 3, second.id: 0}
    assert strike_totals(session, []) == {}


def test_list_strikes_newest_first(session):
    user = make_user(session)
    now = utc_now()
    older = UserStrike(
        user_id=user.id,
        severity=Severity.LOW,
        strike_weight=1,
        action_taken=ModerationAction.WARN,
        created_at=now - timedelta(days=2),
    )
    newer = UserStrike(
        user_id=user.id,
        severity=Severity.HIGH,
        strike_weight=3,
        action_taken=ModerationAction.BAN,
        notes='fraud',
        created_at=now,
    )
    session.add(older)
    session.add(newer)
    session.commit()

    strikes = list_strikes(session, user.id)
    assert [strike.id for strike in strikes] == [newer.id, older.id]
    assert strikes[0].notes == 'fraud'
    assert len(list_strikes(session, user.id, limit=1)) == 1
