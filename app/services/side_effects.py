"""Best-effort delivery of audit entries and notifications.

Effects are plain data built while a decision is applied. Delivery happens
afterwards, outside the decision transaction: each effect is written in its
own worker thread and session, retried with exponential backoff, and a
failure is logged and dropped without touching the other effects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import anyio
from loguru import logger
from sqlmodel import Session

from app.core.config import settings
from app.db.session import engine
from app.services.audit_service import AuditEntry, create_audit_entry
from app.services.notification_service import NotificationMessage, create_notification


@dataclass(frozen=True)
class NotificationEffect:
    message: NotificationMessage

    @property
    def name(self) -> str:
        return f"notification:{self.message.type}"

    def apply(self, session: Session) -> None:
        create_notification(session, self.message)


@dataclass(frozen=True)
class AuditEffect:
    entry: AuditEntry

    @property
    def name(self) -> str:
        return f"audit:{self.entry.action}"

    def apply(self, session: Session) -> None:
        create_audit_entry(session, self.entry)


SideEffect = Union[NotificationEffect, AuditEffect]


@dataclass
class DeliveryResult:
    name: str
    delivered: bool
    attempts: int
    error: Optional[str] = None


def _apply_in_new_session(effect: SideEffect) -> None:
    with Session(engine) as session:
        effect.apply(session)


async def _deliver_one(
    effect: SideEffect,
    limiter: anyio.CapacityLimiter,
    max_attempts: int,
    backoff_seconds: float,
) -> DeliveryResult:
    last_error: Optional[str] = None
    for attempt in range(1, max_attempts + 1):
        try:
            await anyio.to_thread.run_sync(_apply_in_new_session, effect, limiter=limiter)
            return DeliveryResult(name=effect.name, delivered=True, attempts=attempt)
        except Exception as exc:
            last_error = str(exc)
            logger.warning(
                'moderation.side_effect.retry',
                effect=effect.name,
                attempt=attempt,
                error=last_error,
            )
            if attempt < max_attempts and backoff_seconds > 0:
                await anyio.sleep(backoff_seconds * (2 ** (attempt - 1)))
    logger.error('moderation.side_effect.failed', effect=effect.name, attempts=max_attempts, error=last_error)
    return DeliveryResult(name=effect.name, delivered=False, attempts=max_attempts, error=last_error)


async def deliver_side_effects(
    effects: list[SideEffect],
    *,
    max_attempts: Optional[int] = None,
    backoff_seconds: Optional[float] = None,
    concurrency: Optional[int] = None,
) -> list[DeliveryResult]:
    if not effects:
        return []
    attempts = max(1, max_attempts if max_attempts is not None else settings.SIDE_EFFECT_MAX_ATTEMPTS)
    backoff = backoff_seconds if backoff_seconds is not None else settings.SIDE_EFFECT_BACKOFF_SECONDS
    limiter = anyio.CapacityLimiter(max(1, concurrency or settings.SIDE_EFFECT_CONCURRENCY))
    results: list[Optional[DeliveryResult]] = [None] * len(effects)

    async def _run(index: int, effect: SideEffect) -> None:
        results[index] = await _deliver_one(effect, limiter, attempts, backoff)

    async with anyio.create_task_group() as task_group:
        for index, effect in enumerate(effects):
            task_group.start_soon(_run, index, effect)

    delivered = [result for result in results if result is not None]
    logger.info(
        'moderation.side_effects.settled',
        total=len(delivered),
        failed=sum(1 for result in delivered if not result.delivered),
    )
    return delivered
