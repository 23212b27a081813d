MAX_RESUME_CHARS = 10_000
PREVIEW_CHARS = 300
TRUNCATION_MARKER = "..."

ANALYSIS_SCHEMA = """{
  "sections": {
    "skills": {
      "found": ["..."],
      "missing": ["..."],
      "analysis": "..."
    },
    "summary": {
      "present": true,
      "quality": "good",
      "analysis": "...",
      "suggestions": ["..."]
    },
    "experience": {
      "relevance": "high",
      "analysis": "...",
      "keyAchievements": ["..."],
      "suggestions": ["..."]
    }
  },
  "keywordMatching": {
    "matchedKeywords": ["..."],
    "missingKeywords": ["..."],
    "matchPercentage": 0,
    "analysis": "..."
  },
  "atsScore": {
    "score": 0,
    "breakdown": {
      "formatting": 0,
      "keywords": 0,
      "relevance": 0,
      "completeness": 0
    },
    "explanation": "..."
  },
  "positiveFeedback": ["..."],
  "improvements": [
    {
      "category": "...",
      "issue": "...",
      "suggestion": "...",
      "priority": "medium"
    }
  ],
  "overallAssessment": "..."
}"""


def truncate_resume_text(text: str) -> str:
    """Bound the resume text sent to the model. Stored text is never truncated."""
    if len(text) > MAX_RESUME_CHARS:
        return text[:MAX_RESUME_CHARS] + TRUNCATION_MARKER
    return text


def resume_preview(truncated_text: str) -> str:
    return truncated_text[:PREVIEW_CHARS] + TRUNCATION_MARKER


def build_analysis_prompt(resume_text: str, job_title: str, job_description: str) -> str:
    return f"""You are an expert resume analyzer and career advisor. Analyze the following resume against the provided job description and return a comprehensive analysis in JSON format.

RESUME TEXT:
{resume_text}

JOB TITLE: {job_title}

JOB DESCRIPTION:
{job_description}

Return a JSON object ONLY, with this structure:
{ANALYSIS_SCHEMA}

Rules:
- "atsScore.score", every "atsScore.breakdown" value and "keywordMatching.matchPercentage" are numbers from 0 to 100.
- "priority" is one of "high", "medium", "low".
- Do not wrap the JSON in markdown and do not add any text before or after it.
"""
