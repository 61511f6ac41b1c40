from rest_framework.permissions import SAFE_METHODS, BasePermission

from .models import User


EVERYONE = frozenset({User.Role.OWNER, User.Role.ADMIN, User.Role.EXECUTIVE, User.Role.VIEWER})
EDITORS = frozenset({User.Role.OWNER, User.Role.ADMIN, User.Role.EXECUTIVE})

# Actions that sign a document off rather than edit it.
APPROVAL_ACTIONS = frozenset({"approve", "reject", "file"})


class RolePermission(BasePermission):
    """Allow a request by the user's role.

    Safe methods need a role in `allow_read` (or `allow_write`); everything
    else needs a role in `allow_write`. Superusers always pass.
    """

    def __init__(self, allow_read=None, allow_write=None):
        self.allow_write = frozenset(allow_write or ())
        self.allow_read = frozenset(allow_read or ()) | self.allow_write

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.is_superuser:
            return True
        allowed = self.allow_read if request.method in SAFE_METHODS else self.allow_write
        return getattr(user, "role", None) in allowed


def role_permissions(*, write=EDITORS):
    """Everybody signed in reads; `write` roles change things."""
    return [RolePermission(allow_read=EVERYONE, allow_write=write)]


def trade_permissions(action: str | None):
    """Permissions for trade-document endpoints: only owners/admins sign documents off."""
    if action in APPROVAL_ACTIONS:
        return role_permissions(write=User.APPROVER_ROLES)
    return role_permissions()
