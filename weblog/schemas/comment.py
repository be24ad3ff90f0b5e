from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from weblog.schemas.user import UserSummary
from weblog.db.base import MAX_ID


class CommentBody(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)


class CommentCreate(CommentBody):
    model_config = ConfigDict(populate_by_name=True)

    post_id: int = Field(..., alias="postId", le=MAX_ID)


class CommentUpdate(BaseModel):
    content: Optional[str] = Field(None, min_length=1, max_length=1000)


class CommentOut(BaseModel):
    id: int
    content: str
    post_id: int
    user_id: int
    user: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime
