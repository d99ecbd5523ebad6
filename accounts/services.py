"""
accounts.services

Registration, credential checks, and single-field profile updates.

Uniqueness of `login` is enforced by the database (unique constraint); the
services translate the IntegrityError instead of checking first and inserting
second. Field updates are single UPDATE statements.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction

from accounts.access import Action, ensure_allowed
from accounts.models import ROLES, ROLE_CUSTOMER, User
from catalog.models import Item
from pizzastore.db import store_errors
from pizzastore.exceptions import ItemNotFound, UserNotFound, ValidationError

logger = logging.getLogger(__name__)

# Fields a user may change on their own profile.
PROFILE_FIELDS = ("password", "favorite_item", "phone_number")
# Fields a manager may change on any user.
ADMIN_FIELDS = ("login", "password", "role", "favorite_item", "phone_number")


def _required(value: Optional[str], label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} cannot be empty. Please try again.")
    return text


def register_user(login: str, password: str, phone_number: str) -> User:
    """Create a customer account. Duplicate logins are rejected by the store."""
    login = _required(login, "Login")
    if not (password or ""):
        raise ValidationError("Password cannot be empty. Please try again.")
    phone_number = _required(phone_number, "Phone number")

    with store_errors("accounts.register_user"):
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    login=login,
                    password=password,
                    phone_number=phone_number,
                    role=ROLE_CUSTOMER,
                )
        except IntegrityError:
            raise ValidationError(f"User {login} already exists. Please use a different login.")

    logger.info("user_registered", extra={"event": "user_registered", "login": login})
    return user


def login_exists(login: str) -> bool:
    with store_errors("accounts.login_exists"):
        return User.objects.filter(login=login).exists()


def get_user(login: str) -> User:
    with store_errors("accounts.get_user"):
        user = User.objects.select_related("favorite_item").filter(login=login).first()
    if user is None:
        raise UserNotFound()
    return user


def authenticate_user(login: str, password: str) -> Optional[User]:
    """
    Returns the user when the password matches, None when it does not.
    Raises UserNotFound for an unknown login.
    """
    user = get_user((login or "").strip())
    if user.is_active and user.check_password(password or ""):
        return user
    logger.info("login_failed", extra={"event": "login_failed", "login": user.login})
    return None


def current_role(user: User) -> str:
    """
    Re-read the role from the store and refresh `user.role`.
    Inactive or deleted users get an empty role, which the gate denies.
    """
    with store_errors("accounts.current_role"):
        role = (
            User.objects.filter(pk=user.pk, is_active=True)
            .values_list("role", flat=True)
            .first()
        )
    user.role = role or ""
    return user.role


def _resolve_value(field: str, value: Optional[str]):
    """Validate `value` for `field`; returns the column value to store."""
    if field == "password":
        if not (value or ""):
            raise ValidationError("Password cannot be empty. Please try again.")
        return make_password(value)
    if field == "favorite_item":
        name = (value or "").strip()
        if not name:
            return None
        with store_errors("accounts.favorite_item_lookup"):
            item = Item.objects.filter(name=name).first()
        if item is None:
            raise ItemNotFound(f"Item '{name}' is not on the menu.")
        return item
    if field == "phone_number":
        return _required(value, "Phone number")
    if field == "login":
        return _required(value, "Login")
    if field == "role":
        role = (value or "").strip().lower()
        if role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}.")
        return role
    raise ValidationError("Please enter a valid choice.")


def _apply_field(user: User, field: str, value: Optional[str]) -> User:
    resolved = _resolve_value(field, value)
    with store_errors("accounts.update_field"):
        try:
            with transaction.atomic():
                User.objects.filter(pk=user.pk).update(**{field: resolved})
        except IntegrityError:
            raise ValidationError(f"User {value} already exists. Please use a different login.")
    setattr(user, field, resolved)
    return user


def update_profile(user: User, field: str, value: Optional[str]) -> User:
    """Change one field of the requester's own profile."""
    ensure_allowed(user.role, Action.UPDATE_PROFILE)
    if field not in PROFILE_FIELDS:
        raise ValidationError("Please enter a valid choice.")
    _apply_field(user, field, value)
    logger.info("profile_updated", extra={"event": "profile_updated", "login": user.login, "field": field})
    return user


def update_user(requester: User, login: str, field: str, value: Optional[str]) -> User:
    """Manager-only: change one field of any user's record."""
    ensure_allowed(requester.role, Action.UPDATE_USER)
    if field not in ADMIN_FIELDS:
        raise ValidationError("Please enter a valid choice.")
    target = get_user(login)
    _apply_field(target, field, value)
    logger.info(
        "user_updated",
        extra={"event": "user_updated", "by": requester.login, "login": login, "field": field},
    )
    return target
