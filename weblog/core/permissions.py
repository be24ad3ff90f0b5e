from weblog.core.errors import Forbidden
from weblog.db.models.user import User


def is_owner(owner_id, identity: User) -> bool:
    return owner_id is not None and str(owner_id) == str(identity.id)


def check_ownership(owner_id, identity: User, detail: str = "Not authorized to perform this action"):
    """Raise ``Forbidden`` unless ``identity`` is the recorded owner.

    Checked on every mutating call; nothing about ownership is cached.
    """
    if not is_owner(owner_id, identity):
        raise Forbidden(detail)
