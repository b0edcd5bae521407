import logging
import time
import traceback
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root wherever uvicorn is started from
_PROJ_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJ_ROOT / ".env")

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlmodel import Session

from healthmate.api.files import router as files_router
from healthmate.api.insights import router as insights_router
from healthmate.core.config import is_llm_configured, is_storage_configured, settings
from healthmate.core.database import engine, init_db
from healthmate.core.rate_limit import limiter
from healthmate.logging import setup_logging
from healthmate.models import ErrorLog

setup_logging(level=logging.INFO)
log = logging.getLogger("healthmate")


def _cors_origins_list() -> list[str]:
    if not settings.cors_origins or settings.cors_origins.strip() == "*":
        return ["*"]
    return [o.strip() for o in settings.cors_origins.split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    log.info("LLM provider: %s, configured: %s", settings.llm_provider, "yes" if is_llm_configured() else "NO")
    log.info("Cloudinary signing configured: %s", "yes" if is_storage_configured() else "no (raw URLs are used)")
    app.state.http_client = httpx.AsyncClient()
    app.state.summarizer = None
    try:
        yield
    finally:
        await app.state.http_client.aclose()


app = FastAPI(
    title="HealthMate API",
    description="Medical report analysis: English summary and Roman Urdu translation",
    lifespan=lifespan,
)
app.state.limiter = limiter


def _error_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    rid = getattr(request.state, "request_id", None)
    body = {"message": detail, "status_code": status_code}
    if rid:
        body["request_id"] = rid
    return JSONResponse(status_code=status_code, content=body)


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    log.warning("Rate limit exceeded: path=%s limit=%s", request.url.path, exc.detail)
    return _error_response(request, 429, "Too many requests. Please wait a minute and try again.")


def _validation_error_message(exc: RequestValidationError) -> str:
    errs = exc.errors()
    if not errs:
        return "Invalid request."
    first = errs[0]
    loc = list(first.get("loc") or [])
    field = str(loc[-1]) if len(loc) > 0 else None
    if first.get("type") == "missing" and field:
        return f"Missing field: {field}."
    if field == "file_id":
        return "File id must be a number."
    return first.get("msg") or "Invalid request."


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errs = exc.errors()
    log.warning(
        "Request validation error (422): path=%s method=%s detail=%s",
        request.url.path,
        request.method,
        errs,
    )
    rid = getattr(request.state, "request_id", None)
    # ctx may carry exception objects that JSONResponse cannot encode
    detail = [{k: v for k, v in e.items() if k in ("type", "loc", "msg")} for e in errs]
    body = {"message": _validation_error_message(exc), "status_code": 422, "detail": detail}
    if rid:
        body["request_id"] = rid
    return JSONResponse(status_code=422, content=body)


app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.detail if isinstance(exc.detail, str) else str(exc.detail))


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled exception: path=%s %s", request.url.path, exc, exc_info=True)
    try:
        with Session(engine) as db:
            db.add(ErrorLog(
                user_id=None,
                endpoint=request.url.path,
                method=request.method,
                error_message=str(exc)[:2000],
                stack_trace=traceback.format_exc()[:10000],
            ))
            db.commit()
    except Exception as e:
        log.warning("ErrorLog write failed: %s", e)
    return _error_response(request, 500, "Server error")


@app.middleware("http")
async def request_id_and_latency(request: Request, call_next):
    request.state.request_id = str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = request.state.request_id
    log.info(
        "request_id=%s method=%s path=%s status=%s latency_ms=%.2f",
        request.state.request_id,
        request.method,
        request.url.path,
        response.status_code,
        latency_ms,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(files_router)
app.include_router(insights_router)


@app.get("/health")
def health():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        log.warning("Health check database error: %s", e)
        database = "error"
    return {
        "status": "ok",
        "llm_provider": settings.llm_provider,
        "llm_configured": is_llm_configured(),
        "storage_configured": is_storage_configured(),
        "database": database,
    }


@app.get("/")
def index():
    return {"service": "healthmate-api", "status": "running"}
