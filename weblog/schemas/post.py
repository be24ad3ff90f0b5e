from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional
from weblog.schemas.user import UserSummary
from weblog.db.base import MAX_ID


def _category_id(v):
    if v is None:
        return v
    if not isinstance(v, int):
        try:
            v = int(str(v).strip())
        except ValueError:
            raise ValueError("Invalid Category ID format")
    if not 0 < v <= MAX_ID:
        raise ValueError("Invalid Category ID format")
    return v


class CategoryOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class PostCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=5, max_length=200)
    content: str = Field(..., min_length=10)
    category_id: int = Field(..., alias="category")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("category_id", mode="before")
    @classmethod
    def parse_category(cls, v):
        if v in (None, ""):
            raise ValueError("Category ID is required")
        return _category_id(v)


class PostUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=5, max_length=200)
    content: Optional[str] = Field(None, min_length=10)
    category_id: Optional[int] = Field(None, alias="category")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("category_id", mode="before")
    @classmethod
    def parse_category(cls, v):
        return _category_id(v)


class PostSummary(BaseModel):
    id: int
    title: str


class PostOut(BaseModel):
    id: int
    title: str
    content: str
    category_id: int
    category: Optional[CategoryOut] = None
    user_id: int
    user: Optional[UserSummary] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
