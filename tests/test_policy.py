import json

import pytest

from app.core.config import DEFAULT_MODERATION_POLICY_JSON, settings
from app.core.policy import (
    ModerationPolicy,
    get_moderation_policy,
    parse_moderation_policy,
    reset_moderation_policy,
)
from app.models.enums import Severity


def test_default_policy_loads_from_settings():
    policy = get_moderation_policy()
    assert policy.default_severity == Severity.LOW
    assert policy.default_suspension_days == 7
    assert policy.severity_weights == {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}
    assert policy.thresholds.ban == 6


def test_policy_is_cached_until_reset(monkeypatch):
    first = get_moderation_policy()
    assert get_moderation_policy() is first

    payload = json.loads(DEFAULT_MODERATION_POLICY_JSON)
    payload['default_suspension_days'] = 14
    monkeypatch.setattr(settings, 'MODERATION_POLICY', json.dumps(payload))
    reset_moderation_policy()
    try:
        assert get_moderation_policy().default_suspension_days == 14
    finally:
        monkeypatch.undo()
        reset_moderation_policy()


@pytest.mark.parametrize(
    'raw',
    ['', '   ', 'not json', '[]', '{"severity_weights": {"low": 1, "medium": 2}}'],
)
def test_parse_policy_rejects_invalid_input(raw):
    with pytest.raises(RuntimeError):
        parse_moderation_policy(raw)


def test_policy_rejects_weights_outside_range():
    payload = json.loads(DEFAULT_MODERATION_POLICY_JSON)
    payload['severity_weights']['high'] = 5
    with pytest.raises(ValueError):
        ModerationPolicy.model_validate(payload)


def test_policy_rejects_unordered_thresholds():
    payload = json.loads(DEFAULT_MODERATION_POLICY_JSON)
    payload['thresholds'] = {'warning': 4, 'suspension': 3, 'ban': 6}
    with pytest.raises(ValueError):
        ModerationPolicy.model_validate(payload)
