from datetime import datetime, timedelta
from typing import Optional
from sqlmodel import Session, select

from app.core.errors import AuthorizationError
from app.models.base import utc_now
from app.models.enums import ModerationAction
from app.models.user import User


def get_user(session: Session, user_id: str) -> Optional[User]:
    return session.exec(select(User).where(User.id == user_id)).first()


def require_admin_account(session: Session, admin_id: str) -> User:
    admin = get_user(session, admin_id)
    if not admin or not admin.is_admin:
        raise AuthorizationError('Unauthorized')
    return admin


def suspension_length(days: Optional[int], default_days: int) -> int:
    if isinstance(days, int) and not isinstance(days, bool) and days > 0:
        return days
    return default_days


def apply_sanction(
    session: Session,
    user: User,
    action: ModerationAction,
    *,
    suspension_days: Optional[int] = None,
    default_suspension_days: int = 7,
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """Apply an enforcement action to the account fields.

    Returns the suspension end for ``temp_suspend`` and ``None`` otherwise.
    ``warn`` and ``dismiss`` leave the account untouched. A ban always clears
    any running suspension.
    """
    until: Optional[datetime] = None
    if action == ModerationAction.BAN:
        user.is_banned = True
        user.is_suspended = False
        user.suspension_until = None
    elif action == ModerationAction.TEMP_SUSPEND:
        until = (now or utc_now()) + timedelta(days=suspension_length(suspension_days, default_suspension_days))
        user.is_suspended = True
        user.suspension_until = until
    else:
        return None
    session.add(user)
    session.flush()
    return until


def lift_ban(session: Session, user: User) -> User:
    user.is_banned = False
    session.add(user)
    session.flush()
    return user
