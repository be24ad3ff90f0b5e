from fastapi import APIRouter, Depends, File, Form, Path, UploadFile
from typing import Optional
import logging
from pydantic import ValidationError
from sqlalchemy.orm import Session
from weblog.db.models.user import User
from weblog.schemas.user import ProfileUpdate, PublicProfile, UserOut
from weblog.db.base import MAX_ID
from weblog.db.session import get_db
from weblog.core.errors import UpstreamFailure, ValidationFailed, format_errors
from weblog.core.security import get_current_user
from weblog.crud import users as crud
from weblog.crud.transaction import commit_or_raise
from weblog.services import media


router = APIRouter()


# Anyone can read the public subset of a profile
@router.get("/public-profile/{user_id}", response_model=PublicProfile)
def get_public_profile(user_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    return crud.get_user(db, user_id)


@router.get("/profile", response_model=UserOut)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserOut)
async def update_profile(
    bio: Optional[str] = Form(None),
    twitter: Optional[str] = Form(None),
    instagram: Optional[str] = Form(None),
    tiktok: Optional[str] = Form(None),
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    submitted = {
        key: value
        for key, value in {"bio": bio, "twitter": twitter, "instagram": instagram, "tiktok": tiktok}.items()
        if value is not None
    }
    try:
        update = ProfileUpdate(**submitted)
    except ValidationError as e:
        raise ValidationFailed(format_errors(e.errors()))

    stored = None
    if profile_picture is not None and profile_picture.filename:
        stored = await media.upload_image(
            profile_picture,
            field="profilePicture",
            folder="profile_pics",
            public_id_prefix=f"user_{current_user.id}",
        )

    old_public_id = current_user.profile_public_id
    for key, value in update.dict(exclude_unset=True).items():
        setattr(current_user, key, value)
    if stored:
        current_user.profile_picture = stored.url
        current_user.profile_public_id = stored.public_id

    try:
        commit_or_raise(db, "Error updating profile")
    except UpstreamFailure:
        # Don't leave the freshly uploaded image behind
        if stored:
            media.destroy_image(stored.public_id)
        raise
    db.refresh(current_user)

    # Delete old image after successful update
    if stored and old_public_id and old_public_id != stored.public_id:
        media.destroy_image(old_public_id)
    logging.info(f"Updated profile for user {current_user.id}")

    return current_user
