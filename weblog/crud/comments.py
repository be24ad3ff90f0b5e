from typing import List

from sqlalchemy.orm import Session

from weblog.core.errors import NotFound
from weblog.crud.populate import load_refs, user_summary
from weblog.db.models.comment import Comment
from weblog.db.models.user import User


def get_comment(db: Session, comment_id: int) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise NotFound("Comment not found")
    return comment


def get_comments_for_post(db: Session, post_id: int) -> List[Comment]:
    return (
        db.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )


def serialize_comments(db: Session, comments: List[Comment]) -> List[dict]:
    users = load_refs(db, User, (c.user_id for c in comments))
    return [
        {
            "id": comment.id,
            "content": comment.content,
            "post_id": comment.post_id,
            "user_id": comment.user_id,
            "user": user_summary(users.get(comment.user_id)),
            "created_at": comment.created_at,
            "updated_at": comment.updated_at,
        }
        for comment in comments
    ]


def serialize_comment(db: Session, comment: Comment) -> dict:
    return serialize_comments(db, [comment])[0]
