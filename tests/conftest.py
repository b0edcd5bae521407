"""Pytest fixtures: test client, in-memory SQLite, fake PDF and model endpoints."""
import json
import os

import httpx
import pytest
from fastapi.testclient import TestClient

# Must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LLM_PROVIDER", "gemini")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("RATE_LIMIT_ANALYZE_PER_MINUTE", "1000")
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["CLOUDINARY_API_SECRET"] = ""

from sqlmodel import Session, SQLModel

from healthmate.api.deps import get_http_client
from healthmate.core.database import engine, init_db
from healthmate.core.security import create_access_token
from healthmate.main import app
from healthmate.models import ReportFile, User

REPORT_URL = "https://res.cloudinary.com/demo/raw/upload/v1712345678/healthmate_uploads/cbc.pdf"

STRUCTURED_REPLY = json.dumps(
    {
        "summary": "Hemoglobin is slightly low, other values are normal.",
        "abnormalValues": ["Hemoglobin 10.1 g/dL (low)"],
        "suggestions": ["Eat iron-rich foods"],
        "questionsForDoctor": ["Do I need an iron supplement?"],
    }
)
ROMAN_URDU_REPLY = "Hemoglobin thora kam hai, baqi values theek hain."


def make_pdf(text: str) -> bytes:
    """Single-page PDF with one line of Helvetica text and a valid xref table."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


def prompt_of(request: httpx.Request) -> str:
    body = json.loads(request.content)
    return body["contents"][0]["parts"][0]["text"]


class FakeUpstream:
    """
    httpx handler standing in for Cloudinary delivery and the Gemini API.
    Records every request; replies are configurable per test.
    """

    def __init__(self, pdf: bytes | None = None, structured: str = STRUCTURED_REPLY, roman_urdu: str = ROMAN_URDU_REPLY):
        self.pdf = pdf if pdf is not None else make_pdf("Hemoglobin 10.1 g/dL Platelets 250")
        self.pdf_status = 200
        self.structured = structured
        self.roman_urdu = roman_urdu
        self.requests: list[httpx.Request] = []
        self.prompts: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "generativelanguage.googleapis.com":
            prompt = prompt_of(request)
            self.prompts.append(prompt)
            reply = self.roman_urdu if "Roman Urdu" in prompt else self.structured
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": reply}]}}]})
        if self.pdf_status != 200:
            return httpx.Response(self.pdf_status)
        return httpx.Response(200, content=self.pdf, headers={"Content-Type": "application/pdf"})

    @property
    def document_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host != "generativelanguage.googleapis.com"]


@pytest.fixture(autouse=True)
def _fresh_tables():
    """Each test starts with empty tables (in-memory SQLite shared through StaticPool)."""
    init_db()
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def db():
    with Session(engine) as session:
        yield session


@pytest.fixture
def user(db: Session) -> User:
    u = User(email="ayesha@example.com", full_name="Ayesha Khan")
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def report_file(db: Session, user: User) -> ReportFile:
    f = ReportFile(user_id=user.id, filename="cbc.pdf", file_url=REPORT_URL, file_type="application/pdf")
    db.add(f)
    db.commit()
    db.refresh(f)
    return f


@pytest.fixture
def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(upstream: FakeUpstream):
    """TestClient whose outbound HTTP goes to FakeUpstream."""
    fake_http = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app.dependency_overrides[get_http_client] = lambda: fake_http
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
