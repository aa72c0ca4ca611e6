from app.models.base import IDModel, TimestampModel, CreatedAtModel
from app.models.user import User
from app.models.listing import Listing
from app.models.favorite import Favorite
from app.models.report import ListingReport, UserReport, Report
from app.models.strike import UserStrike
from app.models.notification import Notification
from app.models.audit_log import AdminAuditLog
from app.models.moderation_decision import ModerationDecision

__all__ = [
    'IDModel',
    'TimestampModel',
    'CreatedAtModel',
    'User',
    'Listing',
    'Favorite',
    'ListingReport',
    'UserReport',
    'Report',
    'UserStrike',
    'Notification',
    'AdminAuditLog',
    'ModerationDecision',
]
