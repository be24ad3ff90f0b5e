from sqlalchemy import or_
from sqlalchemy.orm import Session

from weblog.core.errors import NotFound
from weblog.db.models.user import User


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def get_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email.lower()).first()


def username_or_email_taken(db: Session, username: str, email: str) -> bool:
    return db.query(User).filter(
        or_(User.username == username, User.email == email.lower())
    ).first() is not None
