import json
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config

from app.config import settings
from app.core.errors import InvalidModelResponse
from app.schemas.analysis import to_number

logger = logging.getLogger(__name__)

_LEADING_FENCE_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE_RE = re.compile(r"```$", re.IGNORECASE)


def sanitize_model_output(text: str) -> str:
    """Strip markdown code fences models like to wrap JSON in."""
    clean = (text or "").strip()
    clean = _LEADING_FENCE_RE.sub("", clean)
    clean = _TRAILING_FENCE_RE.sub("", clean)
    return clean.strip()


def parse_analysis(text: str) -> dict[str, Any]:
    """Parse model output into the analysis object. Raises InvalidModelResponse with the raw text."""
    clean = sanitize_model_output(text)
    try:
        obj = json.loads(clean)
    except (json.JSONDecodeError, ValueError) as e:
        logger.error("Model returned invalid JSON: %s", clean)
        raise InvalidModelResponse(details=str(e), raw_response=clean) from e
    if not isinstance(obj, dict):
        logger.error("Model returned JSON that is not an object: %s", clean)
        raise InvalidModelResponse(details="Expected a JSON object", raw_response=clean)
    return obj


def derive_ats_score(analysis: dict[str, Any]) -> float | None:
    """`atsScore.score` as a finite float, or None when absent or not numeric."""
    ats = analysis.get("atsScore") if isinstance(analysis, dict) else None
    if not isinstance(ats, dict):
        return None
    return to_number(ats.get("score"))


@dataclass(frozen=True)
class AnalysisClient:
    """Bedrock-backed model handle. One instance per process, see get_analysis_client()."""

    runtime: Any
    model_id: str
    max_tokens: int = 4096
    temperature: float = 0.2

    def complete(self, prompt: str) -> str:
        """Call Bedrock LLM via converse API and return response text."""
        response = self.runtime.converse(
            modelId=self.model_id,
            messages=[
                {
                    "role": "user",
                    "content": [{"text": prompt}],
                }
            ],
            inferenceConfig={
                "maxTokens": self.max_tokens,
                "temperature": self.temperature,
            },
        )
        blocks = (response.get("output") or {}).get("message", {}).get("content", [])
        text = "".join(b.get("text", "") for b in blocks if isinstance(b, dict)).strip()
        logger.debug("Bedrock LLM response length=%d", len(text))
        return text

    def analyze(self, prompt: str) -> dict[str, Any]:
        return parse_analysis(self.complete(prompt))


@lru_cache(maxsize=1)
def get_analysis_client() -> AnalysisClient:
    runtime = boto3.client(
        "bedrock-runtime",
        region_name=settings.aws_region,
        config=Config(
            read_timeout=settings.request_timeout_seconds,
            connect_timeout=10,
            # Single attempt: no SDK-level retries.
            retries={"total_max_attempts": 1},
        ),
    )
    logger.info("Bedrock analysis client ready: model=%s region=%s", settings.bedrock_llm_model_id, settings.aws_region)
    return AnalysisClient(
        runtime=runtime,
        model_id=settings.bedrock_llm_model_id,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )
