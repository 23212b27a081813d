import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User
from app.core.security import generate_id

logger = logging.getLogger(__name__)


def get_by_auth_subject(db: Session, auth_subject: str) -> User | None:
    return db.query(User).filter(User.auth_subject == auth_subject).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, auth_subject: str, email: str) -> User:
    user = User(
        id=generate_id(),
        auth_subject=auth_subject,
        email=email,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def upsert_by_auth_subject(db: Session, auth_subject: str, email: str) -> User:
    """
    Return the user for this identity-provider subject, creating it on first sight.
    Existing users are left untouched.
    """
    user = get_by_auth_subject(db, auth_subject)
    if user:
        return user
    try:
        user = create(db, auth_subject, email)
        logger.info("Created user for auth subject %s", auth_subject)
        return user
    except IntegrityError:
        # A concurrent request inserted the same subject first.
        db.rollback()
        user = get_by_auth_subject(db, auth_subject)
        if user is None:
            raise
        return user
