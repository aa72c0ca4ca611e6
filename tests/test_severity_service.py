import json

import pytest

from app.core.config import DEFAULT_MODERATION_POLICY_JSON
from app.core.policy import ModerationPolicy, get_moderation_policy
from app.models.enums import ModerationAction, Severity
from app.services.severity_service import (
    classify_reason,
    immediate_action_hint,
    recommend_action,
    severity_catalog,
)


@pytest.mark.parametrize(
    ('reason', 'severity', 'weight'),
    [
        ('spam', Severity.LOW, 1),
        ('duplicate', Severity.LOW, 1),
        ('other', Severity.LOW, 1),
        ('fake', Severity.MEDIUM, 2),
        ('inappropriate', Severity.MEDIUM, 2),
        ('harassment', Severity.MEDIUM, 2),
        ('fake_profile', Severity.MEDIUM, 2),
        ('impersonation', Severity.MEDIUM, 2),
        ('scam', Severity.HIGH, 3),
        ('prohibited', Severity.HIGH, 3),
        ('scammer', Severity.HIGH, 3),
    ],
)
def test_known_reasons_map_to_fixed_tiers(reason, severity, weight):
    assessment = classify_reason(get_moderation_policy(), reason)
    assert assessment.severity == severity
    assert assessment.strike_weight == weight


@pytest.mark.parametrize('reason', ['', None, 'SCAM', 'counterfeit', ' spam'])
def test_unknown_reasons_default_to_low(reason):
    assessment = classify_reason(get_moderation_policy(), reason)
    assert assessment.severity == Severity.LOW
    assert assessment.strike_weight == 1


def test_substituted_policy_changes_classification():
    payload = json.loads(DEFAULT_MODERATION_POLICY_JSON)
    payload['reasons']['spam']['severity'] = 'high'
    payload['default_severity'] = 'medium'
    policy = ModerationPolicy.model_validate(payload)

    assert classify_reason(policy, 'spam').strike_weight == 3
    assert classify_reason(policy, 'unheard-of').severity == Severity.MEDIUM


@pytest.mark.parametrize(
    ('total', 'severity', 'expected'),
    [
        (0, Severity.LOW, ModerationAction.DISMISS),
        (1, Severity.LOW, ModerationAction.WARN),
        (2, Severity.MEDIUM, ModerationAction.WARN),
        (3, Severity.LOW, ModerationAction.TEMP_SUSPEND),
        (6, Severity.MEDIUM, ModerationAction.BAN),
        (3, Severity.HIGH, ModerationAction.TEMP_SUSPEND),
        (6, Severity.HIGH, ModerationAction.BAN),
    ],
)
def test_recommend_action_uses_thresholds(total, severity, expected):
    assert recommend_action(get_moderation_policy(), total, severity) == expected


def test_severity_catalog_lists_every_reason():
    policy = get_moderation_policy()
    catalog = {entry.reason: entry for entry in severity_catalog(policy)}
    assert set(catalog) == set(policy.reasons)
    assert catalog['scam'].strike_weight == 3
    assert catalog['scam'].immediate_action == 'Immediate content removal + ban'
    assert immediate_action_hint(policy, 'unknown') == ''
