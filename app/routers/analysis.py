import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import AnalysisError, InternalError
from app.core.security import Identity
from app.database import get_db
from app.dependencies import get_analyze_request, get_current_identity, get_llm_client
from app.schemas.resume import AnalyzeResumeRequest, AnalyzeResumeResponse
from app.services.analysis_pipeline import run_analysis
from app.services.llm_client import AnalysisClient

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["analysis"])


@router.post("/analyze-resume", response_model=AnalyzeResumeResponse)
def analyze_resume(
    data: AnalyzeResumeRequest = Depends(get_analyze_request),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    client: AnalysisClient = Depends(get_llm_client),
):
    """Download, extract and analyze a resume against a job description, then save the result."""
    try:
        return run_analysis(db, identity, data, client)
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("Error analyzing resume for subject=%s: %s", identity.subject, e)
        raise InternalError(details=str(e) or "Unknown error") from e
