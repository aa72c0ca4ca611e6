import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, CreatedAtModel


class Favorite(IDModel, CreatedAtModel, SQLModel, table=True):
    __tablename__ = 'user_favorites'
    __table_args__ = (sa.UniqueConstraint('user_id', 'listing_id'),)

    user_id: str = Field(index=True)
    listing_id: str = Field(index=True)
