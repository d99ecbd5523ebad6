"""
accounts.access

Access Control Gate: a static (role, action) permission table.

`authorize()` is a pure function; it never touches the database. Callers must
pass the requester's *current* role (re-read per action) so a role change
mid-session is honored on the very next request.

VIEW_ORDER_DETAIL is granted to every role; customers are additionally scoped
to their own orders by the order services.
"""

from __future__ import annotations

from typing import FrozenSet, Mapping

from accounts.models import ROLE_CUSTOMER, ROLE_DRIVER, ROLE_MANAGER
from pizzastore.exceptions import ForbiddenError


class Action:
    VIEW_PROFILE = "view_profile"
    UPDATE_PROFILE = "update_profile"
    VIEW_CATALOG = "view_catalog"
    VIEW_STORES = "view_stores"
    PLACE_ORDER = "place_order"
    VIEW_OWN_ORDERS = "view_own_orders"
    VIEW_ALL_ORDERS = "view_all_orders"
    VIEW_ORDER_DETAIL = "view_order_detail"
    UPDATE_ORDER_STATUS = "update_order_status"
    UPDATE_CATALOG = "update_catalog"
    UPDATE_USER = "update_user"


_EVERYONE: FrozenSet[str] = frozenset({ROLE_CUSTOMER, ROLE_DRIVER, ROLE_MANAGER})
_STAFF: FrozenSet[str] = frozenset({ROLE_DRIVER, ROLE_MANAGER})
_MANAGERS: FrozenSet[str] = frozenset({ROLE_MANAGER})

PERMISSIONS: Mapping[str, FrozenSet[str]] = {
    Action.VIEW_PROFILE: _EVERYONE,
    Action.UPDATE_PROFILE: _EVERYONE,
    Action.VIEW_CATALOG: _EVERYONE,
    Action.VIEW_STORES: _EVERYONE,
    Action.PLACE_ORDER: _EVERYONE,
    Action.VIEW_OWN_ORDERS: _EVERYONE,
    Action.VIEW_ALL_ORDERS: _STAFF,
    Action.VIEW_ORDER_DETAIL: _EVERYONE,
    Action.UPDATE_ORDER_STATUS: _STAFF,
    Action.UPDATE_CATALOG: _MANAGERS,
    Action.UPDATE_USER: _MANAGERS,
}


def authorize(role: str, action: str) -> bool:
    """Unknown roles and unknown actions are denied."""
    return role in PERMISSIONS.get(action, frozenset())


def ensure_allowed(role: str, action: str) -> None:
    if not authorize(role, action):
        raise ForbiddenError()
