"""Read-time reference resolution.

Each list endpoint fetches its primary rows first, then collects the
referenced ids and loads each referenced table with a single ``IN`` query.
"""
from typing import Dict, Iterable


def load_refs(db, model, ids: Iterable) -> Dict[int, object]:
    wanted = {i for i in ids if i is not None}
    if not wanted:
        return {}
    return {obj.id: obj for obj in db.query(model).filter(model.id.in_(wanted)).all()}


def user_summary(user):
    if user is None:
        return None
    return {"id": user.id, "username": user.username}


def category_summary(category):
    if category is None:
        return None
    return {"id": category.id, "name": category.name}


def post_summary(post):
    if post is None:
        return None
    return {"id": post.id, "title": post.title}
