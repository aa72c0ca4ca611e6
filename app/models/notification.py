from typing import Optional
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, TimestampModel


class Notification(IDModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'notifications'

    user_id: str = Field(index=True)
    type: str
    title: str
    body: str = Field(sa_column=sa.Column(sa.Text(), nullable=False))
    related_id: Optional[str] = None
    read: bool = False
