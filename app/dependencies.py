import logging

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError

from app.core.errors import InvalidRequestBody, Unauthorized
from app.core.security import Identity, decode_identity_token
from app.schemas.resume import AnalyzeResumeRequest
from app.services.llm_client import AnalysisClient, get_analysis_client

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Identity:
    """Principal from the identity provider's bearer token; 401 when absent or invalid."""
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise Unauthorized()
    identity = decode_identity_token(credentials.credentials)
    if not identity:
        logger.info("Auth failed: invalid or expired token")
        raise Unauthorized(details="Invalid or expired token")
    return identity


async def get_analyze_request(
    request: Request,
    identity: Identity = Depends(get_current_identity),
) -> AnalyzeResumeRequest:
    """Parse the analyze body only after the caller is authenticated."""
    try:
        payload = await request.json()
    except ValueError as e:
        logger.info("Invalid JSON body from subject=%s", identity.subject)
        raise InvalidRequestBody(details=str(e)) from e
    try:
        return AnalyzeResumeRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestBody(details=str(e.errors())) from e


def get_llm_client() -> AnalysisClient:
    return get_analysis_client()
