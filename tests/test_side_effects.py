import anyio
from sqlmodel import Session, select

from app.db.session import engine
from app.models.audit_log import AdminAuditLog
from app.models.notification import Notification
from app.services import side_effects as side_effects_module
from app.services.audit_service import AuditEntry
from app.services.notification_service import (
    action_taken_notice,
    format_restriction_date,
    permanent_ban_notice,
    warning_notice,
)
from app.services.side_effects import AuditEffect, NotificationEffect, deliver_side_effects


def _run_async(func, *args, **kwargs):
    return anyio.run(lambda: func(*args, **kwargs))


def test_deliver_side_effects_writes_every_effect():
    effects = [
        AuditEffect(AuditEntry(admin_id='admin-1', action='report_action_ban', target_id='user-1', details={'a': 1})),
        NotificationEffect(action_taken_notice('reporter-1', 'report-1')),
        NotificationEffect(permanent_ban_notice('user-1')),
    ]

    results = _run_async(deliver_side_effects, effects)

    assert [result.delivered for result in results] == [True, True, True]
    with Session(engine) as session:
        notifications = session.exec(select(Notification)).all()
        assert sorted(record.type for record in notifications) == ['action_taken', 'permanent_ban']
        assert all(record.read is False for record in notifications)
        [audit] = session.exec(select(AdminAuditLog)).all()
        assert audit.details == {'a': 1}


def test_failed_effect_is_retried_then_dropped_without_affecting_others(monkeypatch):
    calls = {'count': 0}
    original = side_effects_module.create_notification

    def _flaky(session, message):
        if message.user_id == 'broken-user':
            calls['count'] += 1
            raise RuntimeError('notification store unavailable')
        return original(session, message)

    monkeypatch.setattr(side_effects_module, 'create_notification', _flaky)
    effects = [
        NotificationEffect(warning_notice('broken-user')),
        NotificationEffect(action_taken_notice('reporter-1')),
    ]

    results = _run_async(deliver_side_effects, effects, max_attempts=3, backoff_seconds=0)

    assert calls['count'] == 3
    assert results[0].delivered is False
    assert results[0].attempts == 3
    assert 'unavailable' in results[0].error
    assert results[1].delivered is True
    with Session(engine) as session:
        [record] = session.exec(select(Notification)).all()
        assert record.user_id == 'reporter-1'


def test_transient_failure_recovers_on_retry(monkeypatch):
    attempts = {'count': 0}
    original = side_effects_module.create_audit_entry

    def _once_broken(session, entry):
        attempts['count'] += 1
        if attempts['count'] == 1:
            raise RuntimeError('deadlock')
        return original(session, entry)

    monkeypatch.setattr(side_effects_module, 'create_audit_entry', _once_broken)

    [result] = _run_async(
        deliver_side_effects,
        [AuditEffect(AuditEntry(admin_id='admin-1', action='unban_user', target_id='user-1'))],
        max_attempts=2,
        backoff_seconds=0,
    )

    assert result.delivered is True
    assert result.attempts == 2


def test_empty_plan_is_noop():
    assert _run_async(deliver_side_effects, []) == []


def test_notice_texts():
    from datetime import datetime

    assert format_restriction_date(datetime(2026, 1, 5)) == 'January 5, 2026'
    assert 'Your account was' in warning_notice('user-1').body
    assert '"Lamp"' in warning_notice('user-1', 'Lamp').body
