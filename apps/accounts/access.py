"""
Access control matrix.

Maps (actor, action, target) to an allow/deny decision. Every mutating
operation consults this module, either through the ``HasViewAction`` /
``requires`` permission classes at the HTTP edge or through
``ensure_allowed`` inside a service when the decision depends on a concrete
target (user management).

Decision table:

    admin       bill create/read/export, farmer read, settings read/update,
                price read/update, profile read, share-link create,
                statistics read
    root        everything admin can, plus bill update/delete, farmer
                manage, price delete, activity log read/prune and user
                management (subject to the target rules below)

User management target rules:

    - a non-super root manages admin users only: it cannot create or
      promote to root (taking the super-root username counts as root),
      cannot edit or delete any root-role user (itself and the super root
      included) and cannot delete itself
    - the super root manages every user except itself
    - the super root can never be deleted and its username/role never
      change, even on its own request; it may change its own password
"""

from enum import Enum

from django.conf import settings

from .models import Role


class Action(str, Enum):
    BILL_CREATE = 'bill.create'
    BILL_READ = 'bill.read'
    BILL_UPDATE = 'bill.update'
    BILL_DELETE = 'bill.delete'
    BILL_EXPORT = 'bill.export'
    FARMER_READ = 'farmer.read'
    FARMER_MANAGE = 'farmer.manage'
    SETTINGS_READ = 'settings.read'
    SETTINGS_UPDATE = 'settings.update'
    PRICE_READ = 'price.read'
    PRICE_UPDATE = 'price.update'
    PRICE_DELETE = 'price.delete'
    PROFILE_READ = 'profile.read'
    LOG_READ = 'log.read'
    LOG_PRUNE = 'log.prune'
    USER_LIST = 'user.list'
    USER_CREATE = 'user.create'
    USER_UPDATE = 'user.update'
    USER_DELETE = 'user.delete'
    SHARE_CREATE = 'share.create'
    STATS_READ = 'stats.read'


ADMIN_ACTIONS = frozenset({
    Action.BILL_CREATE,
    Action.BILL_READ,
    Action.BILL_EXPORT,
    Action.FARMER_READ,
    Action.SETTINGS_READ,
    Action.SETTINGS_UPDATE,
    Action.PRICE_READ,
    Action.PRICE_UPDATE,
    Action.PROFILE_READ,
    Action.SHARE_CREATE,
    Action.STATS_READ,
})

ROOT_ACTIONS = ADMIN_ACTIONS | frozenset({
    Action.BILL_UPDATE,
    Action.BILL_DELETE,
    Action.FARMER_MANAGE,
    Action.PRICE_DELETE,
    Action.LOG_READ,
    Action.LOG_PRUNE,
    Action.USER_LIST,
    Action.USER_CREATE,
    Action.USER_UPDATE,
    Action.USER_DELETE,
})

ROLE_ACTIONS = {
    Role.ADMIN: ADMIN_ACTIONS,
    Role.ROOT: ROOT_ACTIONS,
}

USER_TARGETED_ACTIONS = frozenset({
    Action.USER_CREATE,
    Action.USER_UPDATE,
    Action.USER_DELETE,
})


def role_allows(actor, action: Action) -> bool:
    """Check the role tier alone, ignoring any target."""
    if actor is None or not getattr(actor, 'is_authenticated', False):
        return False
    return action in ROLE_ACTIONS.get(actor.role, frozenset())


def can(actor, action: Action, target=None, changes=None) -> bool:
    """
    Decide whether ``actor`` may perform ``action``.

    Args:
        actor: Authenticated user (or AnonymousUser / None)
        action: The operation being attempted
        target: Target user for user-management actions, if known
        changes: Field changes requested (``role``, ``username``, ...)
            for user create/update

    Returns:
        True if allowed
    """
    if not role_allows(actor, action):
        return False
    if action in USER_TARGETED_ACTIONS:
        return _can_manage_user(actor, action, target, changes or {})
    return True


def ensure_allowed(actor, action: Action, target=None, changes=None) -> None:
    """Raise AccessDeniedError unless ``can`` allows the operation."""
    from .services.exceptions import AccessDeniedError

    if not can(actor, action, target=target, changes=changes):
        raise AccessDeniedError('Forbidden')


def _can_manage_user(actor, action, target, changes):
    requested_role = changes.get('role')
    # Saving the super-root username makes the user root (see User.save)
    if changes.get('username') == settings.SUPER_ROOT_USERNAME:
        requested_role = Role.ROOT

    if action == Action.USER_CREATE:
        if requested_role == Role.ROOT:
            return actor.is_super_root
        return True

    # Collection-level check before the target is loaded
    if target is None:
        return True

    if target.is_super_root:
        if action == Action.USER_DELETE:
            return False
        return actor.pk == target.pk and not _changes_identity(target, changes)

    if action == Action.USER_DELETE and actor.pk == target.pk:
        return False

    if actor.is_super_root:
        return True

    if target.role == Role.ROOT:
        return False
    if requested_role == Role.ROOT:
        return False
    return True


def _changes_identity(target, changes):
    if 'username' in changes and changes['username'] != target.username:
        return True
    if 'role' in changes and changes['role'] != target.role:
        return True
    return False
