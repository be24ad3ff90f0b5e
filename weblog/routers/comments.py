from fastapi import APIRouter, Depends, Path, status
from typing import List
import logging
from sqlalchemy.orm import Session
from weblog.db.models.comment import Comment
from weblog.db.models.user import User
from weblog.db.base import MAX_ID
from weblog.db.session import get_db
from weblog.schemas.comment import CommentBody, CommentCreate, CommentOut, CommentUpdate
from weblog.schemas.notifications import MessageResponse
from weblog.core.permissions import check_ownership
from weblog.core.security import get_current_user
from weblog.crud import comments as crud
from weblog.crud.posts import get_post
from weblog.crud.transaction import commit_or_raise
from weblog.services.notifications import notify_post_owner

router = APIRouter()


def create_comment(db: Session, post_id: int, content: str, current_user: User) -> dict:
    post = get_post(db, post_id)

    comment = Comment(content=content, user_id=current_user.id, post_id=post.id)
    db.add(comment)
    commit_or_raise(db, "Server error while creating comment")
    db.refresh(comment)

    # Best effort: a failed notification never fails the comment
    notify_post_owner(db, comment, post)

    return crud.serialize_comment(db, comment)


# The /posts/ routes are declared first so "posts" is never read as a post id
@router.get("/posts/{post_id}", response_model=List[CommentOut])
def get_comments_for_post(post_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    return crud.serialize_comments(db, crud.get_comments_for_post(db, post_id))


@router.post("/posts/{post_id}", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment_on_post(
    comment_in: CommentBody,
    post_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_comment(db, post_id, comment_in.content, current_user)


@router.get("/{post_id}", response_model=List[CommentOut])
def get_comments_by_post_id(post_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    return crud.serialize_comments(db, crud.get_comments_for_post(db, post_id))


@router.post("", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def post_comment(
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_comment(db, comment_in.post_id, comment_in.content, current_user)


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_in: CommentUpdate,
    comment_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = crud.get_comment(db, comment_id)
    check_ownership(comment.user_id, current_user, "Not authorized to edit this comment")

    if comment_in.content:
        comment.content = comment_in.content
        commit_or_raise(db, "Server error while updating comment")
        db.refresh(comment)

    return crud.serialize_comment(db, comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = crud.get_comment(db, comment_id)
    check_ownership(comment.user_id, current_user, "Not authorized to delete this comment")

    db.delete(comment)
    commit_or_raise(db, "Server error while deleting comment")
    logging.info(f"User {current_user.id} deleted comment {comment_id}")

    return {"message": "Comment deleted successfully"}
