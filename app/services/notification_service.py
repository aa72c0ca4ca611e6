from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlmodel import Session
from app.models.notification import Notification


@dataclass(frozen=True)
class NotificationMessage:
    user_id: str
    type: str
    title: str
    body: str
    related_id: Optional[str] = None


def create_notification(session: Session, message: NotificationMessage) -> Notification:
    record = Notification(
        user_id=message.user_id,
        type=message.type,
        title=message.title,
        body=message.body,
        related_id=message.related_id,
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def format_restriction_date(value: datetime) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def action_taken_notice(reporter_id: str, report_id: Optional[str] = None) -> NotificationMessage:
    return NotificationMessage(
        user_id=reporter_id,
        type='action_taken',
        title='Report Update',
        body='Update: The account you reported has been actioned by our moderation team.',
        related_id=report_id,
    )


def warning_notice(
    user_id: str,
    listing_title: Optional[str] = None,
    listing_id: Optional[str] = None,
) -> NotificationMessage:
    if listing_title:
        subject = f'Your listing "{listing_title}" was'
    else:
        subject = 'Your account was'
    return NotificationMessage(
        user_id=user_id,
        type='warning',
        title='Policy Violation Warning',
        body=f'{subject} reported and found to violate our community guidelines. This is a warning.',
        related_id=listing_id,
    )


def temp_suspension_notice(user_id: str, until: datetime) -> NotificationMessage:
    return NotificationMessage(
        user_id=user_id,
        type='temp_suspension',
        title='Account Temporarily Restricted',
        body=(
            'Your account is temporarily restricted. You may browse but cannot message or '
            f'create listings until {format_restriction_date(until)}.'
        ),
    )


def permanent_ban_notice(user_id: str) -> NotificationMessage:
    return NotificationMessage(
        user_id=user_id,
        type='permanent_ban',
        title='Account Removed',
        body=(
            'Your account has been permanently removed from the marketplace due to '
            'repeated or severe policy violations.'
        ),
    )
