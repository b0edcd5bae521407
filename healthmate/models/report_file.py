"""Uploaded report documents. The binary lives in object storage; only its URL is kept here."""
from datetime import datetime

from sqlmodel import Field, SQLModel

from .timestamps import created_at_field


class ReportFile(SQLModel, table=True):
    __tablename__ = "report_files"
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    filename: str = ""
    file_url: str
    file_type: str = ""  # MIME type, e.g. application/pdf, image/png
    uploaded_at: datetime = created_at_field()
