from typing import Any

from sqlalchemy.orm import Session

from app.models.resume import Resume
from app.core.security import generate_id


def create(
    db: Session,
    user_id: str,
    *,
    file_name: str,
    file_url: str,
    file_type: str,
    extracted_text: str,
    job_title: str,
    job_description: str,
    ai_response: dict[str, Any],
    ats_score: float | None,
) -> Resume:
    resume = Resume(
        id=generate_id(),
        user_id=user_id,
        file_name=file_name,
        file_url=file_url,
        file_type=file_type,
        extracted_text=extracted_text,
        job_title=job_title,
        job_description=job_description,
        ai_response=ai_response,
        ats_score=ats_score,
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


def list_by_user(db: Session, user_id: str) -> list[Resume]:
    """All resumes of a user, newest first."""
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc())
        .all()
    )


def get_by_id(db: Session, resume_id: str, user_id: str) -> Resume | None:
    return (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.user_id == user_id)
        .first()
    )
