import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from weblog.db.models import Category, Comment, Notification, Post, User
from weblog.services.media import destroy_image

DEFAULT_CATEGORIES = ["Blog", "Business", "Tech", "Education", "Opportunities", "Lifestyle"]


def seed_categories(db: Session, names=DEFAULT_CATEGORIES) -> list:
    """Insert any missing default categories. Safe to run repeatedly."""
    existing = {name for (name,) in db.query(Category.name).filter(Category.name.in_(names)).all()}
    created = []
    for name in names:
        if name not in existing:
            category = Category(name=name)
            db.add(category)
            created.append(category)
    if created:
        db.commit()
        logging.info(f"Seeded categories: {', '.join(c.name for c in created)}")
    return created


def cleanup_orphans(db: Session) -> dict:
    """Delete content that points at users who no longer exist."""
    user_ids = select(User.id)

    orphan_posts = db.query(Post).filter(~Post.user_id.in_(user_ids)).all()
    image_ids = [post.image_public_id for post in orphan_posts if post.image_public_id]
    for post in orphan_posts:
        db.delete(post)

    orphan_comments = db.query(Comment).filter(~Comment.user_id.in_(user_ids)).all()
    for comment in orphan_comments:
        db.delete(comment)

    orphan_notifications = (
        db.query(Notification)
        .filter(
            or_(
                ~Notification.recipient_id.in_(user_ids),
                ~Notification.sender_id.in_(user_ids),
            )
        )
        .all()
    )
    for notification in orphan_notifications:
        db.delete(notification)

    db.commit()
    for public_id in image_ids:
        destroy_image(public_id)

    result = {
        "posts": len(orphan_posts),
        "comments": len(orphan_comments),
        "notifications": len(orphan_notifications),
    }
    logging.info(f"Removed orphaned content: {result}")
    return result


if __name__ == "__main__":
    from weblog.db.session import SessionLocal

    logging.basicConfig(level=logging.INFO)
    session = SessionLocal()
    try:
        seed_categories(session)
        cleanup_orphans(session)
    finally:
        session.close()
