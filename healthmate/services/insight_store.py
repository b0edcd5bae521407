"""Persistence for report files and their insights."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from healthmate.models import Insight, ReportFile
from healthmate.services.errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


class InsightStore:
    def __init__(self, db: Session):
        self.db = db

    def _save(self, row):
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Database write failed for %s: %s", type(row).__name__, e)
            raise PersistenceError(f"Could not save {type(row).__name__}: {e}") from e
        return row

    def create(self, insight: Insight) -> Insight:
        # No uniqueness check: each analysis run adds a row, even for a file analysed before
        return self._save(insight)

    def find_by_file(self, file_id: int) -> Insight:
        """Insight of a file (the earliest one if the file was analysed more than once)."""
        stmt = (
            select(Insight)
            .where(Insight.file_id == file_id)
            .order_by(Insight.created_at, Insight.id)
            .limit(1)
        )
        insight = self.db.exec(stmt).first()
        if not insight:
            raise NotFoundError("Insight not found")
        return insight

    def get_file(self, file_id: int) -> ReportFile | None:
        return self.db.get(ReportFile, file_id)

    def list_files(self, user_id: int) -> list[ReportFile]:
        stmt = (
            select(ReportFile)
            .where(ReportFile.user_id == user_id)
            .order_by(ReportFile.uploaded_at.desc(), ReportFile.id.desc())
        )
        return list(self.db.exec(stmt).all())

    def create_file(self, user_id: int, filename: str, file_url: str, file_type: str = "") -> ReportFile:
        return self._save(
            ReportFile(user_id=user_id, filename=filename, file_url=file_url, file_type=file_type)
        )
