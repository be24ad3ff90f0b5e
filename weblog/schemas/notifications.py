from datetime import datetime
from pydantic import BaseModel
from typing import Optional
from weblog.schemas.post import PostSummary
from weblog.schemas.user import UserSummary


class NotificationResponse(BaseModel):
    id: int
    recipient_id: int
    sender_id: int
    post_id: int
    type: str
    is_read: bool
    created_at: datetime
    sender: Optional[UserSummary] = None
    post: Optional[PostSummary] = None

    class Config:
        from_attributes = True


class UnreadCount(BaseModel):
    count: int


class MessageResponse(BaseModel):
    message: str
