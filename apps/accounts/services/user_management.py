"""
User management service.

Every operation re-checks the access control matrix against the concrete
target user, so the rules hold regardless of the entry point.
"""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.activity.models import ActivityAction
from apps.activity.services import log_activity

from ..access import Action, ensure_allowed
from ..models import Role
from .exceptions import DuplicateUsernameError, UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


def list_users(*, actor: User) -> QuerySet:
    """Return all users sorted by username (root only)."""
    ensure_allowed(actor, Action.USER_LIST)
    return User.objects.order_by('username')


def create_user(
    *,
    actor: User,
    username: str,
    password: str,
    role: str = Role.ADMIN
) -> User:
    """
    Create a user after checking the matrix.

    Args:
        actor: User performing the operation
        username: New username (unique)
        password: Plain password (hashed on save)
        role: 'admin' or 'root'

    Returns:
        Created User instance

    Raises:
        AccessDeniedError: If the actor may not create a user with this role
        DuplicateUsernameError: If the username already exists
    """
    ensure_allowed(actor, Action.USER_CREATE, changes={'username': username, 'role': role})

    if User.objects.filter(username=username).exists():
        raise DuplicateUsernameError("Username already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(username=username, password=password, role=role)
    except IntegrityError:
        raise DuplicateUsernameError("Username already exists")

    log_activity(
        actor=actor,
        action=ActivityAction.CREATE_USER,
        details=f"Created user {user.username} with role {user.role}",
    )
    return user


def _get_user(user_id: UUID) -> User:
    try:
        return User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


@transaction.atomic
def update_user(
    *,
    actor: User,
    user_id: UUID,
    username: Optional[str] = None,
    password: Optional[str] = None,
    role: Optional[str] = None
) -> User:
    """
    Update username, password and/or role of a user.

    Uses select_for_update to serialise concurrent edits of one user.

    Raises:
        UserNotFoundError: If the target doesn't exist
        AccessDeniedError: If the matrix denies the edit
        DuplicateUsernameError: If the new username is taken
    """
    ensure_allowed(actor, Action.USER_UPDATE)
    target = _get_user(user_id)

    changes = {}
    if username is not None:
        changes['username'] = username
    if role is not None:
        changes['role'] = role
    ensure_allowed(actor, Action.USER_UPDATE, target=target, changes=changes)

    update_fields = []
    if username is not None and username != target.username:
        if User.objects.filter(username=username).exclude(id=target.id).exists():
            raise DuplicateUsernameError("Username already exists")
        target.username = username
        update_fields.append('username')
    if role is not None and role != target.role:
        target.role = role
        update_fields.append('role')
    if password:
        target.set_password(password)
        update_fields.append('password')

    if update_fields:
        target.save(update_fields=update_fields)
        log_activity(
            actor=actor,
            action=ActivityAction.UPDATE_USER,
            details=f"Updated user {target.username} ({', '.join(update_fields)})",
        )

    return target


@transaction.atomic
def delete_user(*, actor: User, user_id: UUID) -> None:
    """
    Delete a user.

    Raises:
        UserNotFoundError: If the target doesn't exist
        AccessDeniedError: If the matrix denies the deletion
    """
    ensure_allowed(actor, Action.USER_DELETE)
    target = _get_user(user_id)
    ensure_allowed(actor, Action.USER_DELETE, target=target)

    username = target.username
    target.delete()

    log_activity(actor=actor, action=ActivityAction.DELETE_USER, details=f"Deleted user {username}")
    logger.info("User %s deleted by %s", username, actor.username)
