from __future__ import annotations

import json
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from app.core.config import settings
from app.models.enums import Severity


class ReasonPolicy(BaseModel):
    model_config = ConfigDict(extra='forbid')

    severity: Severity
    immediate_action: str = ''
    description: str = ''


class EscalationThresholds(BaseModel):
    model_config = ConfigDict(extra='forbid')

    warning: int = Field(default=1, ge=0)
    suspension: int = Field(default=3, ge=0)
    ban: int = Field(default=6, ge=0)

    @model_validator(mode='after')
    def _ordered(self) -> 'EscalationThresholds':
        if not self.warning <= self.suspension <= self.ban:
            raise ValueError('thresholds must satisfy warning <= suspension <= ban')
        return self


class ModerationPolicy(BaseModel):
    """Severity table and sanction defaults used by the enforcement engine.

    Reason codes are matched exactly; anything outside ``reasons`` falls back
    to ``default_severity``. Every severity must carry a weight of 1, 2 or 3.
    """

    model_config = ConfigDict(extra='forbid')

    severity_weights: dict[Severity, int]
    reasons: dict[str, ReasonPolicy] = Field(default_factory=dict)
    default_severity: Severity = Severity.LOW
    default_suspension_days: int = Field(default=7, ge=1)
    thresholds: EscalationThresholds = Field(default_factory=EscalationThresholds)

    @field_validator('severity_weights')
    @classmethod
    def _check_weights(cls, value: dict[Severity, int]) -> dict[Severity, int]:
        missing = [severity.value for severity in Severity if severity not in value]
        if missing:
            raise ValueError(f"missing weight for severities: {', '.join(missing)}")
        for severity, weight in value.items():
            if weight not in (1, 2, 3):
                raise ValueError(f"weight for {severity.value} must be 1, 2 or 3")
        return value

    def severity_for(self, reason: str | None) -> Severity:
        rule = self.reasons.get(reason or '')
        return rule.severity if rule else self.default_severity

    def weight_for(self, severity: Severity) -> int:
        return self.severity_weights[severity]


def parse_moderation_policy(raw: str) -> ModerationPolicy:
    if not raw or not raw.strip():
        raise RuntimeError("MODERATION_POLICY is missing in environment or .env")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RuntimeError("MODERATION_POLICY must be valid JSON") from exc
    if not isinstance(payload, dict):
        raise RuntimeError("MODERATION_POLICY must be a JSON object")
    try:
        return ModerationPolicy.model_validate(payload)
    except ValidationError as exc:
        raise RuntimeError(f"MODERATION_POLICY validation error: {exc}") from exc


@lru_cache
def get_moderation_policy() -> ModerationPolicy:
    return parse_moderation_policy(settings.MODERATION_POLICY)


def reset_moderation_policy() -> None:
    get_moderation_policy.cache_clear()
