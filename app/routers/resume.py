import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import AnalysisError, InternalError, ResumeNotFound, UserNotFound
from app.core.security import Identity
from app.database import get_db
from app.dependencies import get_current_identity
from app.repos.resume_repo import get_by_id as get_resume_by_id, list_by_user
from app.repos.user_repo import get_by_auth_subject
from app.schemas.analysis import AnalysisResult
from app.schemas.resume import ResumeListResponse, ResumeRecord, ResumeReport

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["resumes"])

GOOD_SCORE = 80
FAIR_SCORE = 60


def score_band(score: float | None) -> str:
    if score is None:
        return "unknown"
    if score >= GOOD_SCORE:
        return "good"
    if score >= FAIR_SCORE:
        return "fair"
    return "poor"


def _find_owned_resume(db: Session, identity: Identity, resume_id: str):
    """Resume by id, scoped to the caller. Foreign ids look exactly like missing ones."""
    user = get_by_auth_subject(db, identity.subject)
    if not user:
        return None
    return get_resume_by_id(db, resume_id, user.id)


@router.get("/my-resumes", response_model=ResumeListResponse)
def list_my_resumes(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    try:
        user = get_by_auth_subject(db, identity.subject)
        if not user:
            raise UserNotFound()
        resumes = list_by_user(db, user.id)
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("Failed fetching resumes for subject=%s: %s", identity.subject, e)
        raise InternalError(details=str(e), message="Failed to fetch resumes") from e
    return ResumeListResponse(resumes=[ResumeRecord.model_validate(r) for r in resumes])


@router.get("/resumes/{resume_id}", response_model=ResumeRecord | None)
def get_resume(
    resume_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    resume = _find_owned_resume(db, identity, resume_id)
    if not resume:
        logger.info("Resume %s not found for subject=%s", resume_id, identity.subject)
        return None
    return ResumeRecord.model_validate(resume)


@router.get("/resumes/{resume_id}/report", response_model=ResumeReport)
def get_resume_report(
    resume_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    resume = _find_owned_resume(db, identity, resume_id)
    if not resume:
        raise ResumeNotFound()
    return ResumeReport(
        resume_id=resume.id,
        job_title=resume.job_title,
        file_name=resume.file_name,
        created_at=resume.created_at,
        ats_score=resume.ats_score,
        score_band=score_band(resume.ats_score),
        analysis=AnalysisResult.from_response(resume.ai_response),
    )
