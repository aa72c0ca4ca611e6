from enum import Enum
import sqlalchemy as sa
from sqlalchemy import Column


class UserRole(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


class ReportType(str, Enum):
    LISTING = 'listing'
    USER = 'user'


class ReportStatus(str, Enum):
    PENDING = 'pending'
    RESOLVED = 'resolved'
    DISMISSED = 'dismissed'


class ModerationAction(str, Enum):
    DISMISS = 'dismiss'
    WARN = 'warn'
    TEMP_SUSPEND = 'temp_suspend'
    BAN = 'ban'


class Severity(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


def enum_column(enum_cls: type[Enum], name: str, nullable: bool = False) -> Column:
    return Column(
        sa.Enum(
            enum_cls,
            values_callable=lambda enum: [item.value for item in enum],
            name=name,
        ),
        nullable=nullable,
    )
