from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, TimestampModel, timestamp_type
from app.models.enums import UserRole, enum_column


class User(IDModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'users'

    email: str = Field(index=True, unique=True)
    display_name: Optional[str] = None
    role: UserRole = Field(default=UserRole.USER, sa_column=enum_column(UserRole, 'user_role'))
    is_banned: bool = False
    is_suspended: bool = False
    suspension_until: Optional[datetime] = Field(default=None, sa_type=timestamp_type())

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
