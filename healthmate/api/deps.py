import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from healthmate.core.config import settings
from healthmate.core.database import get_db
from healthmate.core.security import decode_access_token
from healthmate.models import User
from healthmate.services.analysis import ReportAnalyzer
from healthmate.services.insight_store import InsightStore
from healthmate.services.pdf_extract import TextExtractor
from healthmate.services.summarizer import SummarizationClient

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> int:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
        )
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
        )


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found.")
    return user


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Process-wide client opened in the app lifespan."""
    return request.app.state.http_client


def get_store(db: Session = Depends(get_db)) -> InsightStore:
    return InsightStore(db)


def get_summarizer(request: Request, http: httpx.AsyncClient = Depends(get_http_client)) -> SummarizationClient:
    """One client per app, so OpenAI clients built for each key are reused across requests."""
    summarizer = getattr(request.app.state, "summarizer", None)
    if summarizer is None or summarizer.http is not http:
        summarizer = SummarizationClient(settings, http)
        request.app.state.summarizer = summarizer
    return summarizer


def get_analyzer(
    store: InsightStore = Depends(get_store),
    http: httpx.AsyncClient = Depends(get_http_client),
    summarizer: SummarizationClient = Depends(get_summarizer),
) -> ReportAnalyzer:
    return ReportAnalyzer(
        store=store,
        extractor=TextExtractor(settings, http),
        summarizer=summarizer,
        max_chars=settings.analysis_max_chars,
    )
