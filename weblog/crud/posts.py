from typing import List, Optional

from sqlalchemy.orm import Session

from weblog.core.errors import NotFound
from weblog.crud.populate import category_summary, load_refs, user_summary
from weblog.db.models.category import Category
from weblog.db.models.post import Post
from weblog.db.models.user import User
from weblog.services.media import absolute_media_url


def get_post(db: Session, post_id: int) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise NotFound("Post not found")
    return post


def get_posts(db: Session, category_id: Optional[int] = None, skip: int = 0, limit: Optional[int] = None) -> List[Post]:
    query = db.query(Post)
    if category_id is not None:
        query = query.filter(Post.category_id == category_id)
    query = query.order_by(Post.created_at.desc(), Post.id.desc()).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def serialize_posts(db: Session, posts: List[Post]) -> List[dict]:
    categories = load_refs(db, Category, (p.category_id for p in posts))
    users = load_refs(db, User, (p.user_id for p in posts))
    return [
        {
            "id": post.id,
            "title": post.title,
            "content": post.content,
            "category_id": post.category_id,
            "category": category_summary(categories.get(post.category_id)),
            "user_id": post.user_id,
            "user": user_summary(users.get(post.user_id)),
            "image_url": absolute_media_url(post.image_url),
            "created_at": post.created_at,
            "updated_at": post.updated_at,
        }
        for post in posts
    ]


def serialize_post(db: Session, post: Post) -> dict:
    return serialize_posts(db, [post])[0]
