from datetime import datetime

from sqlmodel import Field, SQLModel

from .timestamps import created_at_field


class User(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    full_name: str = ""
    created_at: datetime | None = created_at_field(nullable=True)
