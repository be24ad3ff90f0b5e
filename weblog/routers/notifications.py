from fastapi import APIRouter, Depends, Path
from typing import List
from sqlalchemy.orm import Session
from weblog.db.base import MAX_ID
from weblog.db.session import get_db
from weblog.db.models.user import User
from weblog.core.security import get_current_user
from weblog.crud.notifications import serialize_notifications
from weblog.schemas.notifications import MessageResponse, NotificationResponse, UnreadCount
from weblog.services import notifications as service

router = APIRouter()


# Get notifications
@router.get("", response_model=List[NotificationResponse])
def get_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return service.list_for(db, current_user)


@router.get("/unread-count", response_model=UnreadCount)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"count": service.unread_count(db, current_user)}


# Mark notification as read
@router.put("/{notification_id}", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    notification = service.mark_read(db, notification_id, current_user)
    return serialize_notifications(db, [notification])[0]


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service.delete(db, notification_id, current_user)
    return {"message": "Notification deleted successfully"}
