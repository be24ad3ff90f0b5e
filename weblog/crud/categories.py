from sqlalchemy.orm import Session

from weblog.core.errors import field_error
from weblog.db.models.category import Category


def list_categories(db: Session):
    return db.query(Category).order_by(Category.name.asc()).all()


def require_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise field_error("category", "Category does not exist")
    return category
