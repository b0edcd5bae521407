"""AI analysis result for one uploaded report."""
from datetime import datetime

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from .timestamps import created_at_field


class Insight(SQLModel, table=True):
    __tablename__ = "insights"
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    # Not unique: re-running the analysis for a file adds another row
    file_id: int = Field(foreign_key="report_files.id", index=True)
    summary_english: str = ""
    summary_roman_urdu: str = ""
    highlights: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    questions_for_doctor: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    suggestions: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = created_at_field()
