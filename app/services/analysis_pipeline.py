"""
Submit-for-analysis pipeline.

Steps run strictly in order and any failure aborts the request:
identify user -> validate body -> download -> extract -> truncate ->
prompt + model call -> derive ATS score -> persist -> respond.
Nothing is written to the resumes table before the model result is parsed.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from docparser import text_extractor
from docparser.text_extractor import ensure_supported, extract_text, normalize_extension

from app.core import errors
from app.core.security import Identity
from app.repos.resume_repo import create as create_resume
from app.repos.user_repo import upsert_by_auth_subject
from app.schemas.resume import AnalyzeResumeRequest, AnalyzeResumeResponse
from app.services.file_fetcher import download_file
from app.services.llm_client import AnalysisClient, derive_ats_score
from app.services.prompt_builder import build_analysis_prompt, resume_preview, truncate_resume_text

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("file_url", "file_name", "job_title", "job_description")

_EXTRACTION_ERRORS = {
    text_extractor.UnsupportedFileType: errors.UnsupportedFileType,
    text_extractor.EmptyExtraction: errors.EmptyExtraction,
    text_extractor.UnreadableDocument: errors.UnreadableDocument,
}


def _missing_fields(data: AnalyzeResumeRequest) -> list[str]:
    return [name for name in REQUIRED_FIELDS if not (getattr(data, name) or "").strip()]


def _translate_extraction_error(exc: text_extractor.ExtractionError) -> errors.AnalysisError:
    error_cls = _EXTRACTION_ERRORS.get(type(exc), errors.UnreadableDocument)
    return error_cls(details=str(exc))


def run_analysis(
    db: Session,
    identity: Identity,
    data: AnalyzeResumeRequest,
    client: AnalysisClient,
) -> AnalyzeResumeResponse:
    if not identity.email:
        raise errors.MissingUserEmail()

    try:
        user = upsert_by_auth_subject(db, identity.subject, identity.email)
    except SQLAlchemyError as e:
        db.rollback()
        raise errors.PersistenceFailure(details=str(e), message="Failed to resolve user") from e

    missing = _missing_fields(data)
    if missing:
        raise errors.MissingFields(details=", ".join(missing))

    # Extension comes from the request alone, so reject unsupported types before any download.
    extension = normalize_extension(data.file_name, data.file_type)
    try:
        ensure_supported(extension)
    except text_extractor.ExtractionError as e:
        raise _translate_extraction_error(e) from e

    content = download_file(data.file_url)

    try:
        resume_text = extract_text(content, extension)
    except text_extractor.ExtractionError as e:
        raise _translate_extraction_error(e) from e

    truncated = truncate_resume_text(resume_text)
    prompt = build_analysis_prompt(truncated, data.job_title, data.job_description)
    logger.info(
        "Analyzing resume for user=%s file=%s chars=%d sent=%d",
        user.id, data.file_name, len(resume_text), len(truncated),
    )
    analysis = client.analyze(prompt)
    ats_score = derive_ats_score(analysis)

    try:
        resume = create_resume(
            db,
            user.id,
            file_name=data.file_name,
            file_url=data.file_url,
            file_type=extension,
            extracted_text=resume_text,
            job_title=data.job_title,
            job_description=data.job_description,
            ai_response=analysis,
            ats_score=ats_score,
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise errors.PersistenceFailure(details=str(e)) from e

    logger.info("Resume analysis saved: resume=%s user=%s ats_score=%s", resume.id, user.id, ats_score)
    return AnalyzeResumeResponse(
        resume_id=resume.id,
        job_title=data.job_title,
        job_description=data.job_description,
        resume_preview=resume_preview(truncated),
        analysis=analysis,
    )
