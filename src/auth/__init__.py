"""Auth module init."""

from .permissions import (
    Action,
    ResourceOwner,
    can,
    ensure_can,
    visible_tasks,
    get_current_user,
    require_action,
)

__all__ = [
    "Action",
    "ResourceOwner",
    "can",
    "ensure_can",
    "visible_tasks",
    "get_current_user",
    "require_action",
]
