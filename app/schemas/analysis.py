"""
Typed view over the model's analysis JSON.

The model output is loosely typed, so every field is optional with an
explicit default and values are coerced on the way in: scalars where a list
is expected become one-element lists, non-objects where an object is
expected become the defaults, numeric strings become floats. Unknown keys
are kept.
"""
import json
import math
import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    return [_text(v) for v in value if v is not None]


# Leading numeric prefix, so "85%" and "85/100" read as 85.
_NUMBER_PREFIX_RE = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def to_number(value: Any) -> float | None:
    """Finite float from a number or a string starting with one; None otherwise (booleans included)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PREFIX_RE.match(value)
        if not match:
            return None
        number = float(match.group())
    else:
        return None
    return number if math.isfinite(number) else None


def _flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return None


Text = Annotated[str, BeforeValidator(_text)]
TextList = Annotated[list[str], BeforeValidator(_text_list)]
Number = Annotated[float | None, BeforeValidator(to_number)]
Flag = Annotated[bool | None, BeforeValidator(_flag)]


class _Lenient(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _objects_only(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}


class SkillsSection(_Lenient):
    found: TextList = Field(default_factory=list)
    missing: TextList = Field(default_factory=list)
    analysis: Text = ""


class SummarySection(_Lenient):
    present: Flag = None
    quality: Text = ""
    analysis: Text = ""
    suggestions: TextList = Field(default_factory=list)


class ExperienceSection(_Lenient):
    relevance: Text = ""
    analysis: Text = ""
    key_achievements: TextList = Field(default_factory=list)
    suggestions: TextList = Field(default_factory=list)


class Sections(_Lenient):
    skills: SkillsSection = Field(default_factory=SkillsSection)
    summary: SummarySection = Field(default_factory=SummarySection)
    experience: ExperienceSection = Field(default_factory=ExperienceSection)


class KeywordMatching(_Lenient):
    matched_keywords: TextList = Field(default_factory=list)
    missing_keywords: TextList = Field(default_factory=list)
    match_percentage: Number = None
    analysis: Text = ""


class ScoreBreakdown(_Lenient):
    formatting: Number = None
    keywords: Number = None
    relevance: Number = None
    completeness: Number = None


class AtsScore(_Lenient):
    score: Number = None
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    explanation: Text = ""


class Improvement(_Lenient):
    category: Text = ""
    issue: Text = ""
    suggestion: Text = ""
    priority: Text = ""


def _improvements(value: Any) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    # A bare string is taken as the suggestion itself.
    return [{"suggestion": v} if isinstance(v, str) else v for v in value if v is not None]


class AnalysisResult(_Lenient):
    sections: Sections = Field(default_factory=Sections)
    keyword_matching: KeywordMatching = Field(default_factory=KeywordMatching)
    ats_score: AtsScore = Field(default_factory=AtsScore)
    positive_feedback: TextList = Field(default_factory=list)
    improvements: Annotated[list[Improvement], BeforeValidator(_improvements)] = Field(default_factory=list)
    overall_assessment: Text = ""

    @classmethod
    def from_response(cls, raw: Any) -> "AnalysisResult":
        return cls.model_validate(raw)
