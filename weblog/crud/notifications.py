from typing import List

from sqlalchemy.orm import Session

from weblog.crud.populate import load_refs, post_summary, user_summary
from weblog.db.models.notifications import Notification
from weblog.db.models.post import Post
from weblog.db.models.user import User


def create_notification(db: Session, recipient_id: int, sender_id: int, post_id: int, type: str = "comment") -> Notification:
    notification = Notification(
        recipient_id=recipient_id,
        sender_id=sender_id,
        post_id=post_id,
        type=type,
        is_read=False,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def get_for_recipient(db: Session, recipient_id: int) -> List[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.recipient_id == recipient_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )


def count_unread(db: Session, recipient_id: int) -> int:
    return (
        db.query(Notification)
        .filter(Notification.recipient_id == recipient_id, Notification.is_read == False)  # noqa: E712
        .count()
    )


def serialize_notifications(db: Session, notifications: List[Notification]) -> List[dict]:
    senders = load_refs(db, User, (n.sender_id for n in notifications))
    posts = load_refs(db, Post, (n.post_id for n in notifications))
    return [
        {
            "id": n.id,
            "recipient_id": n.recipient_id,
            "sender_id": n.sender_id,
            "post_id": n.post_id,
            "type": n.type,
            "is_read": n.is_read,
            "created_at": n.created_at,
            "sender": user_summary(senders.get(n.sender_id)),
            "post": post_summary(posts.get(n.post_id)),
        }
        for n in notifications
    ]
