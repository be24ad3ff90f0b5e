from fastapi import APIRouter, Depends, File, Form, Path, Query, Response, UploadFile, status
from typing import List, Optional
import logging
from pydantic import ValidationError
from sqlalchemy.orm import Session
from weblog.db.models.user import User
from weblog.db.models.post import Post
from weblog.db.base import MAX_ID
from weblog.db.session import get_db
from weblog.schemas.post import PostCreate, PostOut, PostUpdate
from weblog.core.errors import UpstreamFailure, ValidationFailed, format_errors
from weblog.core.permissions import check_ownership
from weblog.core.security import get_current_user
from weblog.crud import posts as crud
from weblog.crud.categories import require_category
from weblog.crud.transaction import commit_or_raise
from weblog.services import media

router = APIRouter()


def _validate(model, data: dict):
    try:
        return model(**data)
    except ValidationError as e:
        raise ValidationFailed(format_errors(e.errors()))


async def _store_post_image(image: Optional[UploadFile], current_user: User) -> Optional[media.StoredImage]:
    if image is None or not image.filename:
        return None
    return await media.upload_image(
        image,
        field="image",
        folder="post_images",
        public_id_prefix=f"post_{current_user.id}",
    )


@router.get("", response_model=List[PostOut])
def get_posts(
    category: Optional[int] = Query(None, le=MAX_ID),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    posts = crud.get_posts(db, category_id=category, skip=skip, limit=limit)
    return crud.serialize_posts(db, posts)


@router.get("/{post_id}", response_model=PostOut)
def get_post_by_id(post_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    return crud.serialize_post(db, crud.get_post(db, post_id))


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    post_in = _validate(PostCreate, {"title": title, "content": content, "category": category})
    require_category(db, post_in.category_id)

    stored = await _store_post_image(image, current_user)

    new_post = Post(
        title=post_in.title,
        content=post_in.content,
        category_id=post_in.category_id,
        user_id=current_user.id,
        image_url=stored.url if stored else None,
        image_public_id=stored.public_id if stored else None,
    )
    db.add(new_post)
    try:
        commit_or_raise(db, "Failed to create post")
    except UpstreamFailure:
        # Cleanup uploaded image if database operation failed
        if stored:
            media.destroy_image(stored.public_id)
        raise
    db.refresh(new_post)
    logging.info(f"User {current_user.id} created post {new_post.id}")

    return crud.serialize_post(db, new_post)


@router.put("/{post_id}", response_model=PostOut)
async def update_post(
    post_id: int = Path(..., le=MAX_ID),
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    delete_image: bool = Form(False),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    post = crud.get_post(db, post_id)
    check_ownership(post.user_id, current_user, "Not authorized to update this post")

    submitted = {
        key: value
        for key, value in {"title": title, "content": content, "category": category}.items()
        if value is not None
    }
    post_in = _validate(PostUpdate, submitted)
    changes = post_in.dict(exclude_unset=True)
    if "category_id" in changes:
        require_category(db, changes["category_id"])

    stored = await _store_post_image(image, current_user)
    old_public_id = post.image_public_id

    for key, value in changes.items():
        setattr(post, key, value)
    if stored:
        post.image_url = stored.url
        post.image_public_id = stored.public_id
    elif delete_image:
        post.image_url = None
        post.image_public_id = None

    try:
        commit_or_raise(db, "Failed to update post")
    except UpstreamFailure:
        if stored:
            media.destroy_image(stored.public_id)
        raise
    db.refresh(post)

    # The superseded image is only removed once the new state is saved
    if (stored or delete_image) and old_public_id and old_public_id != post.image_public_id:
        media.destroy_image(old_public_id)

    return crud.serialize_post(db, post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    post = crud.get_post(db, post_id)
    check_ownership(post.user_id, current_user, "Not authorized to delete this post")

    image_public_id = post.image_public_id
    # Comments and notifications on the post go with it
    db.delete(post)
    commit_or_raise(db, "Failed to delete post")
    logging.info(f"User {current_user.id} deleted post {post_id}")

    media.destroy_image(image_public_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
