import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from healthmate.api.deps import get_analyzer, get_current_user, get_store
from healthmate.core.rate_limit import analyze_rate_limit, limiter
from healthmate.models import Insight, ReportFile, User
from healthmate.schemas import AnalyzeResponse, FileRead, InsightRead, InsightWithFile
from healthmate.services.analysis import ReportAnalyzer
from healthmate.services.errors import AnalysisError, NotFoundError, PersistenceError
from healthmate.services.insight_store import InsightStore

router = APIRouter(prefix="/api/ai", tags=["ai"])
log = logging.getLogger(__name__)


def file_to_read(f: ReportFile) -> FileRead:
    return FileRead(
        id=f.id or 0,
        user=f.user_id,
        filename=f.filename,
        file_url=f.file_url,
        file_type=f.file_type,
        uploaded_at=f.uploaded_at,
    )


def insight_to_read(i: Insight) -> InsightRead:
    return InsightRead(
        id=i.id or 0,
        user=i.user_id,
        file=i.file_id,
        summary_english=i.summary_english,
        summary_roman_urdu=i.summary_roman_urdu,
        highlights=list(i.highlights or []),
        questions_for_doctor=list(i.questions_for_doctor or []),
        suggestions=list(i.suggestions or []),
        created_at=i.created_at,
    )


@router.post("/analyze/{file_id}", response_model=AnalyzeResponse)
@limiter.limit(analyze_rate_limit)
async def analyze_file(
    request: Request,
    file_id: int,
    user: User = Depends(get_current_user),
    analyzer: ReportAnalyzer = Depends(get_analyzer),
):
    """Run the AI analysis for an uploaded report and store the result."""
    log.info("/analyze: file_id=%s user_id=%s", file_id, user.id)
    try:
        insight = await analyzer.analyze(file_id, user.id or 0)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError as e:
        log.exception("Could not save insight for file_id=%s: %s", file_id, e)
        raise HTTPException(status_code=500, detail="Could not save the analysis result.")
    except AnalysisError as e:
        log.exception("Error in /analyze: %s", e)
        raise HTTPException(status_code=500, detail=f"AI processing error: {e}")
    return AnalyzeResponse(insight=insight_to_read(insight))


@router.get("/insight/{file_id}", response_model=InsightWithFile)
def get_insight(
    file_id: int,
    user: User = Depends(get_current_user),
    store: InsightStore = Depends(get_store),
):
    try:
        insight = store.find_by_file(file_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Insight not found")
    report = store.get_file(insight.file_id)
    data = insight_to_read(insight).model_dump()
    data["file"] = file_to_read(report) if report else None
    return InsightWithFile(**data)
