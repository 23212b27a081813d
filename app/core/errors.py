"""
Error kinds surfaced by the API.

Every error carries the HTTP status it maps to and a user-facing message.
`details` holds the underlying reason; `raw_response` is only set when the
model returned text that could not be parsed.
"""
from typing import Any

from fastapi import status


class AnalysisError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(
        self,
        details: str | None = None,
        *,
        message: str | None = None,
        raw_response: str | None = None,
    ):
        if message is not None:
            self.message = message
        self.details = details
        self.raw_response = raw_response
        super().__init__(details or self.message)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        if self.raw_response is not None:
            payload["rawResponse"] = self.raw_response
        return payload


class Unauthorized(AnalysisError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class MissingUserEmail(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User email not found"


class MissingFields(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required fields"


class FileDownloadFailed(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Failed to download file from URL"


class UnsupportedFileType(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Unsupported file type. Please upload a PDF or DOCX resume."


class EmptyExtraction(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Could not extract text from resume"


class UnreadableDocument(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Could not read resume document"


class InvalidModelResponse(AnalysisError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Model returned invalid JSON format."


class PersistenceFailure(AnalysisError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Failed to save analysis"


class UserNotFound(AnalysisError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class ResumeNotFound(AnalysisError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resume not found"


class InternalError(AnalysisError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Failed to analyze resume"


class InvalidRequestBody(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body"
