from typing import Optional
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, TimestampModel


class Listing(IDModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'listings'

    user_id: str = Field(index=True)
    title: str
    description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text()))
    price: Optional[float] = None
