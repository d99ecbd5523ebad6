"""
orders.services

Order Identity & Lifecycle Manager.

- create_order:     Order row + one OrderLine per distinct item in ONE transaction
- update_status:    incomplete <-> complete, single-statement, idempotent
- list_orders:      all / recent / own / own_recent, newest first
- get_order_detail: customers only ever see their own orders; anything else is
                    reported as "not found" so order ids do not leak
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Tuple

from django.conf import settings
from django.db import transaction

from accounts.access import Action, authorize, ensure_allowed
from catalog.models import Item, Store
from orders.identifiers import ORDER_ID_MAX, insert_with_unique_id
from orders.models import Order, OrderLine
from pizzastore.db import store_errors
from pizzastore.exceptions import (
    InvalidQuantity,
    ItemNotFound,
    OrderNotFound,
    StoreNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

SCOPE_ALL = "all"
SCOPE_RECENT = "recent"
SCOPE_OWN = "own"
SCOPE_OWN_RECENT = "own_recent"
SCOPES = (SCOPE_ALL, SCOPE_RECENT, SCOPE_OWN, SCOPE_OWN_RECENT)

# OrderLine.quantity is a PositiveIntegerField; Order.total_price is
# DecimalField(max_digits=10, decimal_places=2)
MAX_QUANTITY = 2_147_483_647
MAX_ORDER_TOTAL = Decimal("99999999.99")


@dataclass(frozen=True)
class OrderDetailLine:
    item_name: str
    quantity: int


@dataclass(frozen=True)
class OrderDetail:
    order_id: int
    created_at: datetime
    total_price: Decimal
    status: str
    store_id: str
    owner_login: str
    lines: Tuple[OrderDetailLine, ...]


def recent_orders_limit() -> int:
    return int(getattr(settings, "PIZZASTORE", {}).get("RECENT_ORDERS_LIMIT", 5))


def parse_order_id(raw) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError("Order ID must be a number.")
    if not 1 <= value <= ORDER_ID_MAX:
        raise OrderNotFound()
    return value


def parse_quantity(raw) -> int:
    if isinstance(raw, bool):
        raise InvalidQuantity()
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidQuantity()
    if not 1 <= value <= MAX_QUANTITY:
        raise InvalidQuantity()
    return value


def check_total(total: Decimal) -> Decimal:
    if total > MAX_ORDER_TOTAL:
        raise ValidationError("Order total is too large.")
    return total


def _merge_lines(lines: Iterable[Tuple[str, object]]) -> List[Tuple[str, int]]:
    """One entry per item name, quantities added, first-seen order kept."""
    merged = {}
    for name, quantity in lines:
        key = (name or "").strip()
        if not key:
            raise ValidationError("Item name cannot be empty.")
        merged[key] = merged.get(key, 0) + parse_quantity(quantity)
        if merged[key] > MAX_QUANTITY:
            raise InvalidQuantity()
    return list(merged.items())


def create_order(owner, store_id: str, lines: Iterable[Tuple[str, object]], total_price) -> Order:
    """
    Persist a submitted cart. The Order row and every line commit together or
    not at all; the order id is allocated by insert-and-retry on collision.
    """
    ensure_allowed(owner.role, Action.PLACE_ORDER)
    merged = _merge_lines(lines)
    if not merged:
        raise ValidationError("Your cart is empty.")
    try:
        total = Decimal(str(total_price))
    except (InvalidOperation, ValueError):
        raise ValidationError("Order total must be a number.")
    if not total.is_finite():
        raise ValidationError("Order total must be a number.")
    if total < 0:
        raise ValidationError("Order total cannot be negative.")
    total = check_total(total).quantize(Decimal("0.01"))

    with store_errors("orders.create_order"):
        store = Store.objects.filter(store_id=store_id, is_open=True).first()
        if store is None:
            raise StoreNotFound()

        names = [name for name, _ in merged]
        items = {item.name: item for item in Item.objects.filter(name__in=names)}
        missing = [name for name in names if name not in items]
        if missing:
            raise ItemNotFound(f"Item '{missing[0]}' is not on the menu.")

        # the stored total is the line sum at submission prices
        if total != sum((items[name].price * quantity for name, quantity in merged), Decimal("0.00")):
            raise ValidationError("Order total does not match current menu prices.")

        with transaction.atomic():
            order = insert_with_unique_id(
                lambda candidate: Order.objects.create(
                    order_id=candidate,
                    owner=owner,
                    store=store,
                    total_price=total,
                    status=Order.STATUS_INCOMPLETE,
                ),
                exists=lambda candidate: Order.objects.filter(pk=candidate).exists(),
            )
            for name, quantity in merged:
                OrderLine.objects.create(order=order, item=items[name], quantity=quantity)

    logger.info(
        "order_created",
        extra={
            "event": "order_created",
            "order_id": order.order_id,
            "owner": owner.login,
            "store": store.store_id,
            "lines": len(merged),
            "total": str(total),
        },
    )
    return order


def update_status(requester, order_id, new_status: str) -> Order:
    """Set the status unconditionally (setting the same status twice is fine)."""
    ensure_allowed(requester.role, Action.UPDATE_ORDER_STATUS)
    status = (new_status or "").strip().lower()
    if status not in Order.STATUSES:
        raise ValidationError("Status must be 'incomplete' or 'complete'.")
    oid = parse_order_id(order_id)

    with store_errors("orders.update_status"):
        updated = Order.objects.filter(pk=oid).update(status=status)
        if not updated:
            raise OrderNotFound()
        order = Order.objects.select_related("store", "owner").get(pk=oid)

    logger.info(
        "order_status_updated",
        extra={"event": "order_status_updated", "order_id": oid, "status": status, "by": requester.login},
    )
    return order


def list_orders(requester, scope: str = SCOPE_OWN, limit: Optional[int] = None) -> List[Order]:
    """
    Newest first. Customers are restricted to their own orders whatever scope
    they ask for; recent scopes return at most `limit` (default from settings).
    """
    if scope not in SCOPES:
        raise ValidationError(f"Unknown scope '{scope}'. Use one of: {', '.join(SCOPES)}.")

    qs = Order.objects.select_related("store", "owner").order_by("-created_at")
    if scope in (SCOPE_ALL, SCOPE_RECENT) and authorize(requester.role, Action.VIEW_ALL_ORDERS):
        recent = scope == SCOPE_RECENT
    else:
        ensure_allowed(requester.role, Action.VIEW_OWN_ORDERS)
        qs = qs.filter(owner=requester)
        recent = scope in (SCOPE_RECENT, SCOPE_OWN_RECENT)

    if recent:
        qs = qs[: (limit or recent_orders_limit())]

    with store_errors("orders.list_orders"):
        return list(qs)


def get_order_detail(requester, order_id) -> OrderDetail:
    ensure_allowed(requester.role, Action.VIEW_ORDER_DETAIL)
    oid = parse_order_id(order_id)

    qs = Order.objects.select_related("store", "owner").prefetch_related("lines__item")
    if not authorize(requester.role, Action.VIEW_ALL_ORDERS):
        qs = qs.filter(owner=requester)

    with store_errors("orders.get_order_detail"):
        order = qs.filter(pk=oid).first()
        if order is None:
            raise OrderNotFound()
        lines = tuple(
            OrderDetailLine(item_name=line.item.name, quantity=line.quantity)
            for line in order.lines.all()
        )

    return OrderDetail(
        order_id=order.order_id,
        created_at=order.created_at,
        total_price=order.total_price,
        status=order.status,
        store_id=order.store.store_id,
        owner_login=order.owner.login,
        lines=lines,
    )
