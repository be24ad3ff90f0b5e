from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserSummary(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class Socials(BaseModel):
    twitter: str = ""
    instagram: str = ""
    tiktok: str = ""


class PublicProfile(BaseModel):
    id: int
    username: str
    profile_picture: Optional[str] = None
    bio: str = ""
    socials: Socials = Socials()

    class Config:
        from_attributes = True


class UserOut(PublicProfile):
    email: EmailStr
    created_at: datetime


class ProfileUpdate(BaseModel):
    bio: Optional[str] = Field(None, max_length=200)
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    tiktok: Optional[str] = None
