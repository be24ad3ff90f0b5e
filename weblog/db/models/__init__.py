from weblog.db.models.user import User
from weblog.db.models.category import Category
from weblog.db.models.post import Post
from weblog.db.models.comment import Comment
from weblog.db.models.notifications import Notification

__all__ = ["User", "Category", "Post", "Comment", "Notification"]
