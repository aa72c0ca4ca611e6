from dataclasses import dataclass

from app.core.policy import ModerationPolicy
from app.models.enums import ModerationAction, Severity
from app.schemas.moderation import SeverityCatalogEntry


@dataclass(frozen=True)
class SeverityAssessment:
    reason: str
    severity: Severity
    strike_weight: int


def classify_reason(policy: ModerationPolicy, reason: str | None) -> SeverityAssessment:
    """Map a report reason code to its severity tier and strike weight.

    Unknown or empty reason codes fall back to the policy default (``low``).
    """
    severity = policy.severity_for(reason)
    return SeverityAssessment(
        reason=reason or '',
        severity=severity,
        strike_weight=policy.weight_for(severity),
    )


def recommend_action(policy: ModerationPolicy, projected_total: int, severity: Severity) -> ModerationAction:
    """Advisory escalation only; the engine never applies this on its own."""
    thresholds = policy.thresholds
    if severity == Severity.HIGH:
        if projected_total >= thresholds.ban:
            return ModerationAction.BAN
        return ModerationAction.TEMP_SUSPEND
    if projected_total >= thresholds.ban:
        return ModerationAction.BAN
    if projected_total >= thresholds.suspension:
        return ModerationAction.TEMP_SUSPEND
    if projected_total >= thresholds.warning:
        return ModerationAction.WARN
    return ModerationAction.DISMISS


def immediate_action_hint(policy: ModerationPolicy, reason: str | None) -> str:
    rule = policy.reasons.get(reason or '')
    return rule.immediate_action if rule else ''


def severity_catalog(policy: ModerationPolicy) -> list[SeverityCatalogEntry]:
    return [
        SeverityCatalogEntry(
            reason=reason,
            severity=rule.severity,
            strike_weight=policy.weight_for(rule.severity),
            immediate_action=rule.immediate_action,
            description=rule.description,
        )
        for reason, rule in policy.reasons.items()
    ]
