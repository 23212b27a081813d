import io
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

# Settings are read at import time.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from app.core.security import Identity
from app.database import get_db
from app.dependencies import get_current_identity, get_llm_client
from app.main import app


@dataclass
class StubUser:
    id: str = "user-1"
    auth_subject: str = "auth|user-1"
    email: str = "user@example.com"


@dataclass
class StubResume:
    id: str = "r1"
    user_id: str = "user-1"
    file_name: str = "resume.pdf"
    file_url: str = "https://files.example.com/resume.pdf"
    file_type: str = "pdf"
    extracted_text: str = "Backend engineer"
    job_title: str = "Backend Engineer"
    job_description: str = "Build APIs"
    ai_response: dict = field(default_factory=lambda: {"atsScore": {"score": 72}})
    ats_score: float | None = 72.0
    created_at: datetime = field(default_factory=lambda: datetime(2026, 1, 1, tzinfo=timezone.utc))


class StubAnalysisClient:
    """Stands in for the Bedrock handle; returns canned text and records prompts."""

    def __init__(self, response_text: str = '{"atsScore": {"score": 80}}'):
        self.response_text = response_text
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.response_text

    def analyze(self, prompt: str) -> dict:
        from app.services.llm_client import parse_analysis

        return parse_analysis(self.complete(prompt))


def build_pdf(lines: list[str]) -> bytes:
    """Minimal single-page PDF with one text line per entry (Helvetica, ASCII only)."""
    ops = " ".join(f"({line}) Tj T*" for line in lines)
    stream = f"BT /F1 11 Tf 14 TL 50 780 Td {ops} ET"
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        "<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        "/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream",
        "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = b"%PDF-1.4\n"
    offsets = []
    for num, obj in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{num} 0 obj\n{obj}\nendobj\n".encode("latin-1")
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode("latin-1")
    for off in offsets:
        out += f"{off:010d} 00000 n \n".encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_at}\n%%EOF\n"
    ).encode("latin-1")
    return out


def build_docx(paragraphs: list[str]) -> bytes:
    from docx import Document

    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def identity() -> Identity:
    return Identity(subject="auth|user-1", email="user@example.com")


@pytest.fixture
def llm_stub() -> StubAnalysisClient:
    return StubAnalysisClient()


@pytest.fixture
def client(identity: Identity, llm_stub: StubAnalysisClient):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_identity] = lambda: identity
    app.dependency_overrides[get_llm_client] = lambda: llm_stub
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(llm_stub: StubAnalysisClient):
    """No auth override: requests go through the real bearer-token check."""

    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_llm_client] = lambda: llm_stub
    yield TestClient(app)
    app.dependency_overrides.clear()
