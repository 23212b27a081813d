from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.analysis import AnalysisResult


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeResumeRequest(CamelModel):
    # Optional so that missing values surface as a MissingFields error, not a 422.
    file_url: str | None = None
    file_name: str | None = None
    file_type: str | None = None
    job_title: str | None = None
    job_description: str | None = None


class AnalyzeResumeResponse(CamelModel):
    success: bool = True
    resume_id: str
    job_title: str
    job_description: str
    resume_preview: str
    analysis: dict[str, Any]


class ResumeRecord(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    file_name: str
    file_url: str
    file_type: str
    extracted_text: str
    job_title: str
    job_description: str
    ai_response: Any
    ats_score: float | None = None
    created_at: datetime | None = None


class ResumeListResponse(CamelModel):
    success: bool = True
    resumes: list[ResumeRecord]


class ResumeReport(CamelModel):
    resume_id: str
    job_title: str
    file_name: str
    created_at: datetime | None = None
    ats_score: float | None = None
    score_band: str
    analysis: AnalysisResult
