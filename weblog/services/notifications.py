"""Notifications derived from comments.

The comment is the authoritative event. A notification is a projection of it
that is attempted exactly once, inline, after the comment has been committed:
if that attempt fails the session is rolled back, the error is logged, and
the comment request carries on as if nothing happened.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from weblog.core.errors import NotFound
from weblog.core.permissions import check_ownership
from weblog.crud import notifications as crud
from weblog.crud.transaction import commit_or_raise
from weblog.db.models.comment import Comment
from weblog.db.models.notifications import Notification
from weblog.db.models.post import Post
from weblog.db.models.user import User


def notify_post_owner(db: Session, comment: Comment, post: Post) -> Optional[Notification]:
    recipient_id = post.user_id
    sender_id = comment.user_id
    if recipient_id is None or str(recipient_id) == str(sender_id):
        return None

    try:
        return crud.create_notification(
            db,
            recipient_id=recipient_id,
            sender_id=sender_id,
            post_id=post.id,
            type="comment",
        )
    except Exception as e:
        db.rollback()
        logging.error(f"Notification failed for comment {comment.id} on post {post.id}: {str(e)}", exc_info=True)
        return None


def _get_for_recipient(db: Session, notification_id: int, identity: User) -> Notification:
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.recipient_id == identity.id)
        .first()
    )
    if not notification:
        raise NotFound("Notification not found")
    return notification


def mark_read(db: Session, notification_id: int, identity: User) -> Notification:
    notification = _get_for_recipient(db, notification_id, identity)
    if not notification.is_read:
        notification.is_read = True
        commit_or_raise(db, "Server error updating notification")
        db.refresh(notification)
    return notification


def delete(db: Session, notification_id: int, identity: User):
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification:
        raise NotFound("Notification not found")
    check_ownership(notification.recipient_id, identity, "Not authorized to delete this notification")
    db.delete(notification)
    commit_or_raise(db, "Server error deleting notification")


def list_for(db: Session, identity: User) -> List[dict]:
    return crud.serialize_notifications(db, crud.get_for_recipient(db, identity.id))


def unread_count(db: Session, identity: User) -> int:
    return crud.count_unread(db, identity.id)
