import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from weblog.core.errors import UpstreamFailure


def commit_or_raise(db: Session, message: str = "Server error"):
    """Commit, or roll back and report the failure as a 500."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Database error: {str(e)}")
        raise UpstreamFailure(message)
